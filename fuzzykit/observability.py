"""Structured logging for fuzzy inference."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from typing import Any


def configure_logging(level: str) -> None:
    """Configure logging format once."""

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
    )


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a structured log event as one JSON line."""

    if not logger.isEnabledFor(level):
        return
    payload = {
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        "event": event,
        **fields,
    }
    logger.log(level, json.dumps(payload, default=str, separators=(",", ":")))
