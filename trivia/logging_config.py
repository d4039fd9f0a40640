"""Configuration du logging du serveur."""

from __future__ import annotations

import logging
from logging import Logger


def configure_logging(level: str = "info") -> Logger:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logging.getLogger("trivia")
