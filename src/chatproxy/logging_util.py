"""Logging utilities.

Key goal:
- Each pipeline step logs clearly so a failing request is easy to locate in the host's logs.
- Keep logging config minimal; a host that configures logging itself wins.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

_DEFAULT_LEVEL = os.environ.get("CHATPROXY_LOG_LEVEL", "INFO").upper()

def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)

    # If already configured elsewhere, do not attach handlers again.
    if logger.handlers:
        return logger

    logger.setLevel(_DEFAULT_LEVEL)

    h = logging.StreamHandler()
    fmt = logging.Formatter("[%(levelname)s] %(name)s:%(lineno)d - %(message)s")
    h.setFormatter(fmt)
    logger.addHandler(h)

    return logger

def log_step(logger: logging.Logger, step: str, msg: str, request_id: Optional[str] = None):
    prefix = f"[{request_id}] " if request_id else ""
    logger.info("[STEP %s] %s%s", step, prefix, msg)
