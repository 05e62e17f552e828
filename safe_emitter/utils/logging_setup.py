"""Logging configuration helpers."""

import logging
from pathlib import Path
from typing import Optional


def setup_logging(level: str = "INFO", log_file: Optional[Path | str] = None) -> None:
    """Configure logging with a console handler and an optional file handler.
    
    The console handler honours ``level``; the file handler, when requested,
    always records DEBUG so dispatch traces are kept on disk.
    
    Args:
        level: Console log level name (DEBUG, INFO, ...)
        log_file: Optional path of a debug log file
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    console_formatter = logging.Formatter('%(levelname)s - %(name)s - %(message)s')
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_formatter)
    handlers: list[logging.Handler] = [console_handler]

    if log_file is not None:
        file_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(name)s - %(funcName)s - %(message)s'
        )
        file_handler = logging.FileHandler(Path(log_file), encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if log_file is not None else log_level,
        handlers=handlers,
        force=True,
    )
