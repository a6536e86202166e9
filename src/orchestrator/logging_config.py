"""
Etsmart Logging Configuration
=============================

Logging for the CLI and the API, driven by the LOG_* settings
(see LoggingConfig in src/data/config.py):

    LOG_LEVEL  root level (overridden to DEBUG by --verbose)
    LOG_JSON   one JSON object per line instead of plain text
    LOG_FILE   optional rotated log file

Scoring modules attach context through `extra=`:

    logger.info("...", extra={"stage": "signals"})        # pipeline
    logger.info("...", extra={"query": query})            # Etsy client
    logger.info("...", extra={"score": 2.9, "niche": n})  # scorers

Usage:
    from src.orchestrator.logging_config import setup_logging

    setup_logging(verbose=True)
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from typing import List, Optional

from ..data.config import LoggingConfig, get_settings

# Context keys set by the pipeline, the Etsy client and the scorers
CONTEXT_FIELDS = ("stage", "query", "niche", "score")

PLAIN_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)-34s | %(message)s"

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3


class JSONFormatter(logging.Formatter):
    """
    One JSON line per record, with the scoring context when present.

        {"ts": "...", "level": "INFO", "logger": "src.scoring.launch_potential",
         "msg": "...", "niche": "jewelry", "score": 2.9}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update({
            key: getattr(record, key)
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    formatter = (
        JSONFormatter() if config.json_logs
        else logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        os.makedirs(os.path.dirname(config.log_file) or ".", exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            config.log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: Optional[LoggingConfig] = None, verbose: bool = False):
    """
    Replace the root handlers according to the logging settings.

    Args:
        config: Logging settings (default: get_settings().logging)
        verbose: Force DEBUG level
    """
    cfg = config or get_settings().logging
    level = "DEBUG" if verbose else cfg.level.upper()

    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    root.handlers[:] = _build_handlers(cfg)

    # One line per Etsy request is enough
    logging.getLogger("urllib3").setLevel(logging.WARNING)
