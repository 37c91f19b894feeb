"""
Banner Watermarker v1.2 - Logging Module
========================================
Centralized logging system
"""

import logging
import sys
from typing import Optional
import config

class WatermarkerLogger:
    """Configures the shared application logger once"""

    _root: Optional[logging.Logger] = None

    @classmethod
    def get_logger(cls, name: str = "watermarker") -> logging.Logger:
        """Get a child logger of the configured application logger"""
        if cls._root is None:
            cls._root = cls._setup_logger("watermarker")
        if name == "watermarker":
            return cls._root
        return cls._root.getChild(name)

    @classmethod
    def _setup_logger(cls, name: str) -> logging.Logger:
        """Setup logger with file and console handlers"""
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)

        # Prevent duplicate handlers
        if logger.handlers:
            return logger

        # Console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, config.LOG_LEVEL))
        console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))

        # File handler
        try:
            log_path = config.get_project_root() / config.LOG_FILE
            file_handler = logging.FileHandler(log_path, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}")

        logger.addHandler(console_handler)
        return logger

# Convenience function
def get_logger(name: str = "watermarker") -> logging.Logger:
    """Get logger instance"""
    return WatermarkerLogger.get_logger(name)
