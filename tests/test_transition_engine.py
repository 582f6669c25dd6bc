import math

import pytest

from timeline_engine.models.render_models import (
    BlendMode,
    CircleClip,
    InsetClip,
    PolygonClip,
    Role,
    TransitionParams,
)
from timeline_engine.models.timeline_models import TransitionType
from timeline_engine.operators.transition_engine import FAMILIES, transition_parameters


MAIN = Role.MAIN
OUT = Role.OUTGOING


def _main_hidden(params: TransitionParams) -> bool:
    """True when the incoming layer contributes nothing visible."""
    if params.opacity is not None and params.opacity == pytest.approx(0):
        return True
    if params.scale is not None and params.scale == pytest.approx(0):
        return True
    if params.translate_percent is not None:
        x, y = params.translate_percent
        if abs(x) >= 100 or abs(y) >= 100:
            return True
    clip = params.clip_path
    if isinstance(clip, InsetClip):
        return clip.visible_fraction == pytest.approx(0)
    if isinstance(clip, CircleClip):
        return clip.radius == pytest.approx(0)
    if isinstance(clip, PolygonClip):
        return clip.area == pytest.approx(0)
    return False


def _main_shown(params: TransitionParams) -> bool:
    if params.opacity is not None and params.opacity < 0.99:
        return False
    if params.translate_percent is not None:
        x, y = params.translate_percent
        if abs(x) > 1 or abs(y) > 1:
            return False
    clip = params.clip_path
    if isinstance(clip, InsetClip):
        return clip.visible_fraction > 0.97
    if isinstance(clip, CircleClip):
        return clip.radius >= 70.7
    if isinstance(clip, PolygonClip):
        return clip.area >= 9700
    return True


class TestDissolves:
    def test_dissolve(self):
        assert transition_parameters("dissolve", OUT, 0.25).opacity == pytest.approx(0.75)
        assert transition_parameters("dissolve", MAIN, 0.25).opacity == pytest.approx(0.25)
        assert transition_parameters("film-dissolve", MAIN, 0.25).opacity == pytest.approx(0.25)

    def test_additive_dissolve(self):
        params = transition_parameters("additive-dissolve", OUT, 0.4)

        assert params.opacity == pytest.approx(0.6)
        assert params.blend_mode == BlendMode.ADDITIVE

    def test_dip_to_black(self):
        assert transition_parameters("dip-to-black", OUT, 0.25).opacity == pytest.approx(0.5)
        assert transition_parameters("dip-to-black", OUT, 0.75).opacity == 0
        assert transition_parameters("dip-to-black", MAIN, 0.25).opacity == 0
        assert transition_parameters("dip-to-black", MAIN, 0.75).opacity == pytest.approx(0.5)

    def test_fade_dissolve_alias(self):
        for p in (0.1, 0.5, 0.9):
            for role in (OUT, MAIN):
                assert transition_parameters("fade-dissolve", role, p) == \
                    transition_parameters("dip-to-black", role, p)

    def test_dip_to_white_brightness(self):
        out = transition_parameters("dip-to-white", OUT, 0.25)
        main = transition_parameters("dip-to-white", MAIN, 0.25)

        assert out.opacity == pytest.approx(0.5)
        assert out.filter.brightness == pytest.approx(1.5)
        assert main.filter.brightness == pytest.approx(2.5)

    def test_non_additive_dissolve(self):
        assert transition_parameters("non-additive-dissolve", MAIN, 0.5).opacity == pytest.approx(0.25)
        assert transition_parameters("non-additive-dissolve", OUT, 0.5).opacity == pytest.approx(0.25)

    def test_gradient_wipe_behaves_as_dissolve(self):
        assert transition_parameters("gradient-wipe", MAIN, 0.3) == \
            transition_parameters("dissolve", MAIN, 0.3)


class TestMotion:
    def test_slide(self):
        out = transition_parameters("slide", OUT, 0.25, "left")
        main = transition_parameters("slide", MAIN, 0.25, "left")

        assert out.translate_percent is None
        assert out.z_index_hint == 10
        assert main.translate_percent == pytest.approx((75, 0))
        assert main.z_index_hint == 20

    @pytest.mark.parametrize("direction,expected", [
        ("left", (50, 0)),
        ("right", (-50, 0)),
        ("up", (0, 50)),
        ("down", (0, -50)),
        (None, (50, 0)),
        ("sideways", (50, 0)),
    ])
    def test_direction_vectors(self, direction, expected):
        params = transition_parameters("push", MAIN, 0.5, direction)
        assert params.translate_percent == pytest.approx(expected)

    def test_push_outgoing_leaves_opposite_side(self):
        params = transition_parameters("push", OUT, 0.5, "left")
        assert params.translate_percent == pytest.approx((-50, 0))

    def test_whip_blur_peaks_mid_blend(self):
        assert transition_parameters("whip", MAIN, 0.5).filter.blur_px == pytest.approx(20)
        assert transition_parameters("whip", OUT, 0.0).filter.blur_px == pytest.approx(0)
        assert transition_parameters("whip", MAIN, 0.5).translate_percent == pytest.approx((50, 0))

    def test_spin(self):
        out = transition_parameters("spin", OUT, 0.5)
        main = transition_parameters("spin", MAIN, 0.5)

        assert out.rotate_deg == pytest.approx(-90)
        assert main.rotate_deg == pytest.approx(90)
        assert main.scale == pytest.approx(0.5)


class TestShapes:
    def test_split(self):
        horizontal = transition_parameters("split", MAIN, 0.5)
        vertical = transition_parameters("split", MAIN, 0.5, "up")

        assert horizontal.clip_path == InsetClip(25, 0, 25, 0)
        assert vertical.clip_path == InsetClip(0, 25, 0, 25)
        assert transition_parameters("split", OUT, 0.5).is_empty

    def test_iris_round(self):
        params = transition_parameters("iris-round", MAIN, 0.5)

        assert params.clip_path == CircleClip(radius=37.5)
        assert params.clip_path.to_css() == "circle(37.5% at 50% 50%)"
        assert transition_parameters("circle", MAIN, 0.5) == params

    def test_iris_box(self):
        params = transition_parameters("iris-box", MAIN, 0.2)
        assert params.clip_path.to_css() == "inset(40% 40% 40% 40%)"

    @pytest.mark.parametrize("direction,expected", [
        ("right", InsetClip(0, 75, 0, 0)),
        ("up", InsetClip(75, 0, 0, 0)),
        ("down", InsetClip(0, 0, 75, 0)),
        ("left", InsetClip(0, 0, 0, 75)),
        (None, InsetClip(0, 0, 0, 75)),
    ])
    def test_wipe(self, direction, expected):
        params = transition_parameters("wipe", MAIN, 0.25, direction)
        assert params.clip_path.to_css() == expected.to_css()

    def test_clock_wipe_sweeps_clockwise_from_twelve(self):
        quarter = transition_parameters("clock-wipe", MAIN, 0.25).clip_path

        assert quarter.points[0] == (50.0, 50.0)
        assert quarter.points[1] == pytest.approx((50, -25))
        assert quarter.points[-1] == pytest.approx((125, 50))
        assert transition_parameters("radial-wipe", MAIN, 0.25).clip_path == quarter

    def test_clock_wipe_area_grows(self):
        areas = [
            transition_parameters("clock-wipe", MAIN, p).clip_path.area
            for p in (0.0, 0.25, 0.5, 0.75)
        ]
        assert areas == sorted(areas)
        assert areas[0] == 0

    def test_iris_diamond(self):
        params = transition_parameters("iris-diamond", MAIN, 0.5)
        assert params.clip_path.points == ((50, 25), (75, 50), (50, 75), (25, 50))

    def test_iris_cross_arm_width(self):
        points = transition_parameters("iris-cross", MAIN, 0.5).clip_path.points
        assert points[0] == pytest.approx((20, 0))
        assert points[1] == pytest.approx((80, 0))

    def test_page_peel(self):
        params = transition_parameters("page-peel", MAIN, 0.25)

        assert params.clip_path.points == ((0, 0), (50, 0), (0, 50))
        assert params.z_index_hint == 50


class TestZooms:
    def test_zoom_in(self):
        out = transition_parameters("zoom-in", OUT, 0.25)
        main = transition_parameters("zoom-in", MAIN, 0.25)

        assert (out.opacity, out.scale) == pytest.approx((0.75, 1.25))
        assert (main.opacity, main.scale) == pytest.approx((0.25, 0.25))

    def test_zoom_out(self):
        out = transition_parameters("zoom-out", OUT, 0.25)
        main = transition_parameters("zoom-out", MAIN, 0.25)

        assert (out.opacity, out.scale) == pytest.approx((0.75, 0.75))
        assert (main.opacity, main.scale) == pytest.approx((0.25, 1.75))

    def test_cross_zoom(self):
        assert transition_parameters("cross-zoom", OUT, 0.5).scale == pytest.approx(3)
        assert transition_parameters("cross-zoom", MAIN, 0.5).scale == pytest.approx(0.6)

    def test_flash_zoom_brightness(self):
        assert transition_parameters("flash-zoom-in", OUT, 0.2).filter.brightness == pytest.approx(2)
        assert transition_parameters("flash-zoom-out", MAIN, 0.2).filter.brightness == pytest.approx(5)


class TestStylized:
    def test_film_burn_peaks_mid_blend(self):
        params = transition_parameters("film-burn", MAIN, 0.5)

        assert params.filter.brightness == pytest.approx(4)
        assert params.filter.sepia == pytest.approx(0.5)
        assert params.filter.saturate == pytest.approx(2)
        assert params.filter.contrast == pytest.approx(0.8)
        assert params.scale == pytest.approx(1.1)

    def test_rgb_split_hue(self):
        params = transition_parameters("rgb-split", OUT, 0.25)
        assert params.filter.hue_rotate_deg == pytest.approx(90)
        assert params.opacity == pytest.approx(0.75)

    def test_glitch_is_a_cut(self):
        assert transition_parameters("glitch", MAIN, 0.5).is_empty
        assert transition_parameters("glitch", OUT, 0.5).is_empty


class TestTotality:
    @pytest.mark.parametrize("family", ["none", "teleport", None, ""])
    def test_unknown_and_none_are_empty(self, family):
        assert transition_parameters(family, MAIN, 0.5).is_empty
        assert transition_parameters(family, OUT, 0.5).is_empty

    @pytest.mark.parametrize("family", list(FAMILIES))
    @pytest.mark.parametrize("p", [-1.0, 0.0, 0.37, 0.999, 1.0, 2.0, math.nan])
    def test_every_family_is_total(self, family, p):
        for role in (MAIN, OUT):
            params = transition_parameters(family, role, p, "down")
            assert isinstance(params, TransitionParams)
            params.to_css()

    def test_progress_clamped(self):
        assert transition_parameters("dissolve", MAIN, 1.5).opacity == 1
        assert transition_parameters("dissolve", MAIN, -0.5).opacity == 0
        assert transition_parameters("dissolve", MAIN, math.nan).opacity == 0

    @pytest.mark.parametrize("family", [
        f for f in FAMILIES
        if f not in (TransitionType.IRIS_CROSS, TransitionType.IRIS_DIAMOND,
                     TransitionType.RGB_SPLIT,
                     TransitionType.RIPPLE_DISSOLVE, TransitionType.FILM_BURN,
                     TransitionType.ZOOM_BLUR, TransitionType.SPIN,
                     TransitionType.MORPH_CUT, TransitionType.FLASH_ZOOM_IN,
                     TransitionType.FLASH_ZOOM_OUT, TransitionType.CROSS_ZOOM,
                     TransitionType.SMOOTH_WIPE)
    ])
    def test_main_hidden_at_start_and_shown_at_end(self, family):
        assert _main_hidden(transition_parameters(family, MAIN, 0.0))
        assert _main_shown(transition_parameters(family, MAIN, 1.0))


class TestCss:
    def test_transform_order(self):
        params = TransitionParams(translate_percent=(10, -5), rotate_deg=45, scale=0.5)

        assert params.to_css() == {"transform": "translate(10%, -5%) rotate(45deg) scale(0.5)"}

    def test_full_css(self):
        params = transition_parameters("additive-dissolve", MAIN, 0.5)
        assert params.to_css() == {"opacity": 0.5, "mix-blend-mode": "plus-lighter"}

    def test_filter_css(self):
        params = transition_parameters("dip-to-white", OUT, 0.25)
        assert params.to_css()["filter"] == "brightness(1.5)"

    def test_empty_params(self):
        assert TransitionParams().to_css() == {}
