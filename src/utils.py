"""
Utility functions for receipt parsing: configuration loading and logging setup
"""

import os
import copy
import sys
from typing import Dict, Optional
from pathlib import Path

import yaml
from loguru import logger


CONFIG_ENV_VAR = "RECEIPT_PARSER_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "parser_config.yaml"


def default_config() -> Dict:
    """Return default configuration"""
    return {
        'parser': {
            'column_keywords': [
                'latte', 'mimosa', 'juice', 'scramble', 'fruit', 'biscuit',
                'sausage', 'pancake', 'egg', 'small', 'cup', 'side',
            ],
        },
        'logging': {
            'level': 'INFO',
            'log_file': None,
        },
        'split': {
            'default_currency': 'ZAR',
            'tip_options': [10, 15, 20, 25],
            'default_tip_percentage': 10,
        },
    }


def load_config(config_path: Optional[str] = None) -> Dict:
    """
    Load configuration from YAML file

    Args:
        config_path: Path to YAML file. Falls back to $RECEIPT_PARSER_CONFIG,
                     then config/parser_config.yaml in the repository.

    Returns:
        Configuration dictionary; sections present in the file override the
        defaults key by key.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH

    config = default_config()

    if not os.path.exists(config_path):
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return config

    with open(config_path, 'r', encoding='utf-8') as f:
        loaded = yaml.safe_load(f) or {}

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = copy.deepcopy(values)

    logger.debug(f"Loaded config from {config_path}")
    return config


def ensure_directory(dir_path: str) -> str:
    """
    Ensure directory exists, create if it doesn't

    Args:
        dir_path: Directory path

    Returns:
        Absolute path to directory
    """
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return str(path.absolute())


# Logging setup helper
def setup_logging(log_file: Optional[str] = None, level: str = "INFO", stream=None):
    """
    Setup logging configuration

    Args:
        log_file: Path to log file (console only when None)
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        stream: Console stream (default: stdout)
    """
    # Remove default handler
    logger.remove()

    # Add console handler
    logger.add(
        stream or sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level
    )

    # Add file handler
    if log_file:
        ensure_directory(os.path.dirname(log_file) or ".")
        logger.add(
            log_file,
            rotation="10 MB",
            retention="30 days",
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
        )

    logger.info("Logging initialized")
