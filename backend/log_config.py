from __future__ import annotations

import logging
import os
from typing import IO, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_log_level(default: int = logging.INFO) -> int:
    """Read HYDRA_LOG_LEVEL, falling back to ``default`` for unknown names."""
    level_name = os.getenv("HYDRA_LOG_LEVEL", "").strip().upper()
    level = getattr(logging, level_name, None) if level_name else None
    if not isinstance(level, int):
        return default
    return level


def configure_logging(stream: Optional[IO[str]] = None) -> None:
    logging.basicConfig(level=resolve_log_level(), stream=stream, format=LOG_FORMAT)
