"""
Logging for the validator run.

Every module logs through ``get_logger(__name__)``. Output goes to:

* ``logs/gedcom_validator.log``: the whole run (file read, store counts,
  rules run, export), one line per event.
* ``logs/gedcom_validator_<module>.log``: the same events split by module,
  handy when chasing a single builder or rule.
* the console, at WARNING and above only, so log lines do not interleave
  with the printed report. ``--debug`` or ``debug: true`` lowers everything
  to DEBUG, which includes a line for every skipped input line.

Directory, file name, level and rotation come from the ``logging`` block of
``config/gedcom_validator.yml``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List, Optional

from gedcom_validator.config import get_config

PROJECT_ROOT = Path(__file__).resolve().parents[3]
BASE_LOGGER_NAME = "gedcom_validator"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROTATE_MAX_BYTES = 5 * 1024 * 1024
ROTATE_BACKUPS = 5

_loggers: Dict[str, Logger] = {}
_settings: Optional["LogSettings"] = None


@dataclass
class LogSettings:
    log_dir: Path
    master_file: str
    level: int
    rotate: bool
    debug: bool

    @classmethod
    def from_config(cls, cfg) -> "LogSettings":
        section = cfg.logging
        raw_dir = Path(section.get("dir") or cfg.paths.get("logs_dir") or "logs")
        debug = bool(getattr(cfg, "debug", False))
        level = getattr(logging, str(section.get("level", "INFO")).upper(), logging.INFO)
        return cls(
            log_dir=raw_dir if raw_dir.is_absolute() else PROJECT_ROOT / raw_dir,
            master_file=section.get("file") or "gedcom_validator.log",
            level=logging.DEBUG if debug else level,
            rotate=bool(section.get("rotate", False)),
            debug=debug,
        )


def _file_handler(filename: str) -> logging.Handler:
    _settings.log_dir.mkdir(parents=True, exist_ok=True)
    path = _settings.log_dir / filename
    if _settings.rotate:
        handler: logging.Handler = RotatingFileHandler(
            path, maxBytes=ROTATE_MAX_BYTES, backupCount=ROTATE_BACKUPS, encoding="utf-8"
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(_settings.level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _base_logger() -> Logger:
    """The ``gedcom_validator`` logger, with master file and console handlers."""
    global _settings
    base = logging.getLogger(BASE_LOGGER_NAME)
    if _settings is not None:
        return base

    _settings = LogSettings.from_config(get_config())
    base.setLevel(_settings.level)
    base.propagate = False
    base.addHandler(_file_handler(_settings.master_file))

    console = StreamHandler()
    console.setLevel(logging.DEBUG if _settings.debug else logging.WARNING)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    base.addHandler(console)
    return base


def get_logger(name: str | None = None) -> Logger:
    """
    Logger for ``name``, nested under ``gedcom_validator``.

    ``get_logger("x")`` and ``get_logger("gedcom_validator.x")`` return the
    same logger; its module log file is attached on first use.
    """
    base = _base_logger()
    full_name = name or BASE_LOGGER_NAME
    if full_name != BASE_LOGGER_NAME and not full_name.startswith(BASE_LOGGER_NAME + "."):
        full_name = f"{BASE_LOGGER_NAME}.{full_name}"
    if full_name == BASE_LOGGER_NAME:
        return base

    logger = logging.getLogger(full_name)
    logger.setLevel(_settings.level)
    logger.propagate = True
    if not any(getattr(h, "is_module_handler", False) for h in logger.handlers):
        handler = _file_handler(f"{full_name.replace('.', '_')}.log")
        handler.is_module_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    _loggers[full_name] = logger
    return logger


def set_debug(enabled: bool) -> None:
    """Lower every validator logger and handler to DEBUG (``--debug``)."""
    base = _base_logger()
    if not enabled:
        return

    _settings.level = logging.DEBUG
    _settings.debug = True
    for logger in (base, *_loggers.values()):
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)


def list_active_loggers() -> List[str]:
    """Names of the module loggers created so far."""
    return list(_loggers)
