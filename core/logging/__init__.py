"""Module-based logging with run-based rotation.

Per-module log files that rotate at run boundaries (server start or test
module).

Usage:
    # At run entry points (server startup, tests):
    from core.logging import start_run, end_run

    start_run("hub-api")
    try:
        # ... do work ...
    finally:
        end_run()

    # In modules:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("This goes to the appropriate module log file")

Log files are created in logs/ (IMAGEHUB_LOG_DIR):
    - logs/images.log, logs/providers.log, logs/hub-api.log (per-module)
    - logs/run-3p.log (all third-party libraries)
    - logs/*.previous.log (previous run's logs)
"""

from core.logging.handlers import ModuleDispatchHandler, ThirdPartyHandler
from core.logging.run_manager import (
    MODULE_TO_LOG,
    end_run,
    get_current_run_id,
    is_first_party,
    module_to_log_name,
    start_run,
)

__all__ = [
    "start_run",
    "end_run",
    "get_current_run_id",
    "is_first_party",
    "module_to_log_name",
    "ModuleDispatchHandler",
    "ThirdPartyHandler",
    "MODULE_TO_LOG",
]
