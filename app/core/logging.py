import logging
import sys
from app.core.config import settings

# Loggers owned by this project; their level follows settings.store_log_level
STORE_LOGGERS = ("evaluation", "app")

def configure_logging() -> None:
    """
    Configure console logging for the eval store.

    Not called by the store itself: entry points (CLI, server, scripts)
    call this once at startup.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    
    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    
    # Store trace messages are debug-level; tune them without touching the root
    for name in STORE_LOGGERS:
        logging.getLogger(name).setLevel(settings.store_log_level)
    
    logging.getLogger("asyncio").setLevel(logging.WARNING)
