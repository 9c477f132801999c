from .config import settings, Settings
from .logging_config import setup_logging, get_logger

__all__ = ["settings", "Settings", "setup_logging", "get_logger"]
