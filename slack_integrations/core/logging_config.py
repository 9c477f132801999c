import logging
import logging.config
import sys
from pathlib import Path
from typing import Dict, Any, Optional


def build_logging_config(log_dir: str = "logs") -> Dict[str, Any]:
    """Build the dictConfig mapping, writing file logs under ``log_dir``"""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "default",
                "stream": sys.stdout,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "detailed",
                "filename": f"{log_dir}/app.log",
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
                "encoding": "utf8",
            },
            "error_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "ERROR",
                "formatter": "detailed",
                "filename": f"{log_dir}/errors.log",
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
                "encoding": "utf8",
            },
        },
        "loggers": {
            "": {  # Root logger
                "level": "INFO",
                "handlers": ["console", "file"],
            },
            "slack_integrations": {
                "level": "DEBUG",
                "handlers": ["console", "file", "error_file"],
                "propagate": False,
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console", "file"],
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console", "file"],
                "propagate": False,
            },
            "slack_sdk": {
                "level": "WARNING",  # Set to DEBUG to see raw Web API traffic
                "handlers": ["file"],
                "propagate": False,
            },
            "slack_bolt": {
                "level": "INFO",
                "handlers": ["console", "file"],
                "propagate": False,
            },
            "botocore": {
                "level": "WARNING",
                "handlers": ["file"],
                "propagate": False,
            },
        },
    }


def setup_logging(log_dir: Optional[str] = None):
    """Setup logging configuration"""
    if log_dir is None:
        from slack_integrations.core.config import settings
        log_dir = settings.LOG_DIR

    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(log_dir))

    logger = logging.getLogger("slack_integrations")
    logger.info("Logging configuration initialized")

    return logger


def get_logger(name: str = "slack_integrations") -> logging.Logger:
    """Get a logger with the specified name"""
    return logging.getLogger(name)
