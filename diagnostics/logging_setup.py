from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

_CONFIGURED = False
_HANDLER: Optional[logging.Handler] = None
_PACKAGES = ("event_bus", "progression", "core_center", "app_ui")
_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"


def configure_logging(base_dir: Optional[Path] = None, level: int = logging.INFO) -> Dict[str, str]:
    global _CONFIGURED, _HANDLER
    root = base_dir or Path("data/roaming")
    log_dir = root / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / "teashelf.log"

    logger_name = "teashelf" if base_dir is None else "teashelf.test"
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.propagate = False

    if base_dir is None and not _CONFIGURED:
        handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        # module loggers are named after their packages, route them to the same file
        for name in _PACKAGES:
            package_logger = logging.getLogger(name)
            package_logger.setLevel(level)
            package_logger.addHandler(handler)
        _HANDLER = handler
        _CONFIGURED = True
    elif base_dir is not None and not logger.handlers:
        handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        # package logger levels are not touched here
        for name in _PACKAGES:
            logging.getLogger(name).addHandler(handler)

    return {
        "log_path": str(log_path),
        "format": "kv",
        "handlers": "file",
        "logger_name": logger_name,
    }