"""
Logging configuration.

We use a YAML logging config (`src/findmyroom/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `FINDMYROOM_LOG_LEVEL`).
"""

from __future__ import annotations

import logging.config

from findmyroom.config.settings import get_logging_config, get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure the Python logging system based on packaged YAML config + settings.

    `level` (e.g. from a CLI `--log-level` flag) takes priority over settings.
    """
    settings = get_settings()
    config = dict(get_logging_config())

    level = (level or settings.app.log_level).upper()
    config["root"] = {**config.get("root", {}), "level": level}
    config["handlers"] = {
        name: ({**handler, "level": level} if isinstance(handler, dict) and "level" in handler else handler)
        for name, handler in config.get("handlers", {}).items()
    }

    logging.config.dictConfig(config)
