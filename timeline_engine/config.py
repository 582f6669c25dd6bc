import logging
import os
from pathlib import Path

from dotenv import load_dotenv


ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(ROOT_DIR / ".env")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

TIMELINE_ENGINE_LOG_FILE = os.getenv("TIMELINE_ENGINE_LOG_FILE", "").strip()
TIMELINE_ENGINE_LOG_LEVEL = os.getenv("TIMELINE_ENGINE_LOG_LEVEL", LOG_LEVEL).strip()

TICK_INTERVAL_SECONDS = float(os.getenv("TIMELINE_TICK_INTERVAL", "0.1"))
DEFAULT_TIMELINE_DURATION = float(os.getenv("TIMELINE_DEFAULT_DURATION", "30"))
MEDIA_SEEK_TOLERANCE = float(os.getenv("MEDIA_SEEK_TOLERANCE", "0.2"))


def _engine_file_handlers(engine_logger: logging.Logger, log_path: Path) -> list[logging.FileHandler]:
    return [
        handler for handler in engine_logger.handlers
        if isinstance(handler, logging.FileHandler)
        and handler.baseFilename == str(log_path)
    ]


def configure_logging(log_file: str | None = None, level: str | None = None) -> None:
    """
    Set up root logging and the optional engine log file.

    Hosts call this once at startup; library imports never configure logging.
    Relative log paths resolve against the project root. Calling it again with
    the same file does not add a second handler.
    """
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    log_file = (log_file if log_file is not None else TIMELINE_ENGINE_LOG_FILE).strip()
    if not log_file:
        return

    log_path = Path(log_file)
    if not log_path.is_absolute():
        log_path = ROOT_DIR / log_path
    level_value = getattr(logging, (level or TIMELINE_ENGINE_LOG_LEVEL).upper(), logging.INFO)

    engine_logger = logging.getLogger("timeline_engine")
    if not _engine_file_handlers(engine_logger, log_path):
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        engine_logger.addHandler(file_handler)
    for handler in _engine_file_handlers(engine_logger, log_path):
        handler.setLevel(level_value)
    engine_logger.setLevel(level_value)
