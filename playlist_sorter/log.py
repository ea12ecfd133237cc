from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Optional

ROOT_LOGGER = "playlist_sorter"
REDACTED_PREFIX_LENGTH = 10

_BEARER_PATTERN = re.compile(r"(?i)(bearer|access_token|accessToken|refresh_token)([\s:=\"']+)([A-Za-z0-9\-_.~+/]{12,})")


def redact(credential: Optional[str]) -> str:
    """Return a loggable stand-in for a credential: a short prefix and ``...``."""
    if not credential:
        return "<none>"
    if len(credential) <= REDACTED_PREFIX_LENGTH:
        return "*" * len(credential)
    return credential[:REDACTED_PREFIX_LENGTH] + "..."


def mask_secrets(text: str) -> str:
    return _BEARER_PATTERN.sub(lambda match: match.group(1) + match.group(2) + redact(match.group(3)), text)


class StructuredFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": mask_secrets(record.getMessage()),
        }
        playlist_id = getattr(record, "playlist_id", None)
        if playlist_id:
            entry["playlistId"] = playlist_id
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger
