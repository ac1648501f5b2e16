from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .config import DEFAULT_LOG_PATH


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.DEBUG,
    console_level: Optional[int] = logging.WARNING,
) -> str:
    """Configure logging.

    Every command and decision goes to the log file. The console only gets
    warnings and above, since operator-facing text is printed separately.

    Notes:
    - If the requested location is not writable we fall back to a file in
      the current working directory and report the path actually used.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_hostprep_configured", False):
        return getattr(logger, "_hostprep_log_path", log_path)

    log_path = str(Path(log_path).expanduser())
    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler: logging.Handler = logging.FileHandler(log_path)
    except OSError:
        # Fall back to a writable location.
        chosen_path = str(Path.cwd() / "hostprep.log")
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if console_level is not None:
        console = logging.StreamHandler()
        console.setLevel(console_level)
        console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_hostprep_configured", True)
    setattr(logger, "_hostprep_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
