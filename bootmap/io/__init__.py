"""I/O utilities for bootmap.

Provides logging setup and atomic file output.
"""

from .files import atomic_write_text, ensure_output_dir
from .logging import (
    ColoredFormatter,
    add_file_handler,
    get_timestamped_log_path,
    log_json,
    setup_console_logging,
)

__all__ = [
    # Files
    "atomic_write_text",
    "ensure_output_dir",
    # Logging
    "ColoredFormatter",
    "add_file_handler",
    "get_timestamped_log_path",
    "log_json",
    "setup_console_logging",
]
