"""
Configuration Manager for trie root computation
Handles configuration values through environment variables and centralized defaults.
"""

import os
import logging
from typing import Optional, Dict, Any
from dataclasses import dataclass

from .error_handling import ConfigurationError


LOGGER_NAME = 'trie_roots'
LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s'
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class TrieRootConfig:
    """Configuration settings for trie root computation"""

    # Logging Configuration
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    log_max_size: int = 10_000_000  # 10MB
    log_backup_count: int = 5


class TrieRootConfigManager:
    """Centralized configuration management for trie root computation"""

    def __init__(self):
        self.config = TrieRootConfig()
        self._load_from_environment()
        self._validate_config()

    def _load_from_environment(self):
        """Load configuration from environment variables"""
        try:
            self.config.log_level = os.getenv('TRIE_ROOTS_LOG_LEVEL', self.config.log_level).upper()
            self.config.log_file = os.getenv('TRIE_ROOTS_LOG_FILE')
            self.config.log_max_size = int(os.getenv('TRIE_ROOTS_LOG_MAX_SIZE', self.config.log_max_size))
            self.config.log_backup_count = int(os.getenv('TRIE_ROOTS_LOG_BACKUP_COUNT', self.config.log_backup_count))
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric configuration value: {e}") from e

    def _validate_config(self):
        """Validate configuration values"""
        errors = []

        if self.config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"Invalid log level: {self.config.log_level}. Must be one of {VALID_LOG_LEVELS}")

        if self.config.log_max_size <= 0:
            errors.append(f"Invalid log max size: {self.config.log_max_size}")

        if self.config.log_backup_count < 0:
            errors.append(f"Invalid log backup count: {self.config.log_backup_count}")

        if errors:
            raise ConfigurationError(
                f"Configuration validation failed: {'; '.join(errors)}",
                context={'errors': errors},
            )

    def setup_logging(self) -> logging.Logger:
        """Attach handlers to the package logger based on configuration"""
        formatter = logging.Formatter(LOG_FORMAT)

        package_logger = logging.getLogger(LOGGER_NAME)
        package_logger.setLevel(getattr(logging, self.config.log_level))

        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)

        if self.config.log_file:
            try:
                log_dir = os.path.dirname(self.config.log_file)
                if log_dir and not os.path.exists(log_dir):
                    os.makedirs(log_dir, exist_ok=True)

                from logging.handlers import RotatingFileHandler
                file_handler = RotatingFileHandler(
                    self.config.log_file,
                    maxBytes=self.config.log_max_size,
                    backupCount=self.config.log_backup_count
                )
                file_handler.setFormatter(formatter)
                package_logger.addHandler(file_handler)
            except OSError as e:
                package_logger.warning(f"Could not setup file logging: {e}")

        return package_logger

    def get_config(self) -> TrieRootConfig:
        """Get the current configuration"""
        return self.config

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the current configuration"""
        return {
            'log_level': self.config.log_level,
            'log_file': self.config.log_file,
        }


def setup_logging() -> logging.Logger:
    """Read logging settings from the environment and attach handlers to the package logger"""
    return TrieRootConfigManager().setup_logging()
