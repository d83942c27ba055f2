"""File-based debug logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FILENAME = 'moxie_debug.log'


def setup_file_logging(log_dir: Path) -> Path:
    """Configure file-based debug logging into *log_dir*. Returns the log path."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME
    root = logging.getLogger('moxie')
    root.setLevel(logging.DEBUG)
    if not any(isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_path for h in root.handlers):
        handler = logging.FileHandler(log_path, encoding='utf-8')
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(message)s'))
        root.addHandler(handler)
    logging.getLogger('moxie.app').info('Debug logging started → %s', log_path)
    return log_path
