from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, Mapping, Optional


_LOGGER = logging.getLogger("webapp_smoke")


def level_from_env(environ: Optional[Mapping[str, str]] = None) -> int:
    """Resolve ``LOG_LEVEL`` (a name or a number); anything else means WARNING."""
    environ = os.environ if environ is None else environ
    value = environ.get("LOG_LEVEL", "").strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.WARNING


def get_logger() -> logging.Logger:
    if not _LOGGER.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter("%(message)s")
        handler.setFormatter(formatter)
        _LOGGER.addHandler(handler)
        _LOGGER.setLevel(level_from_env())
        _LOGGER.propagate = False
    return _LOGGER


def log_json(message: str, level: int = logging.INFO, **fields: Any) -> None:
    logger = get_logger()
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"message": message}
    payload.update(fields)
    logger.log(level, json.dumps(payload, default=str))
