"""Image hub configuration and environment setup.

Loads ``.env``, detects development mode and installs the module-based log
handlers.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from core.logging import ModuleDispatchHandler, ThirdPartyHandler, start_run

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_logging_configured = False


def is_dev_mode() -> bool:
    """Check if running in development mode.

    Returns:
        True if IMAGEHUB_MODE is set to 'dev', False otherwise.
    """
    return os.getenv("IMAGEHUB_MODE", "prod").lower() == "dev"


def get_log_dir() -> Path:
    """Directory for log files (IMAGEHUB_LOG_DIR, default ``logs``)."""
    return Path(os.getenv("IMAGEHUB_LOG_DIR", "logs"))


def configure_logging(run_id: str | None = None) -> None:
    """Install per-module and third-party file handlers on the root logger.

    Project loggers log at DEBUG in dev mode and INFO otherwise; libraries
    log at WARNING unless in dev mode. Calling again only starts a new run.

    Args:
        run_id: If given, start a logging run so files rotate on first write
    """
    global _logging_configured

    if not _logging_configured:
        log_dir = get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        formatter = logging.Formatter(LOG_FORMAT)

        root = logging.getLogger()
        root.setLevel(logging.DEBUG if is_dev_mode() else logging.WARNING)
        for handler in (ModuleDispatchHandler(log_dir), ThirdPartyHandler(log_dir)):
            handler.setFormatter(formatter)
            root.addHandler(handler)

        level = logging.DEBUG if is_dev_mode() else logging.INFO
        for package in ("core", "services"):
            logging.getLogger(package).setLevel(level)
        _logging_configured = True

    if run_id:
        start_run(run_id)
