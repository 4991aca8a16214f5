import json
import logging
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER = "thrive_admin"


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        root.setLevel(logging.INFO)
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    return logging.getLogger(name)


def configure_level(level: str) -> None:
    get_logger(ROOT_LOGGER).setLevel(level)


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    record_id: str | None,
    outcome: str,
    detail: Any = None,
    level: int = logging.INFO,
) -> None:
    logger.log(
        level,
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": logging.getLevelName(level),
                "module": module,
                "action": action,
                "record_id": record_id,
                "outcome": outcome,
                "detail": detail,
            },
            default=str,
        ),
    )
