"""
Configuration Management for the Iris Detector

This module handles loading, validating and saving the detector's JSON
configuration: the training data path, the default query point, the
neighbor count and the log level.
"""

import copy
import json
import os
from typing import Dict

from iris_knn.store import NUM_FEATURES


DEFAULT_CONFIG_PATH = "./iris_knn/config.json"

DEFAULT_CONFIG = {
    "dataset_path": "./data/iris.csv",
    "k": 3,
    "query": [6.5, 3.0, 5.4, 2.4],
    "log_level": "INFO"
}

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def default_config() -> Dict:
    """Return a fresh copy of the built-in configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict:
    """
    Load configuration from a JSON file.

    Args:
        config_path (str): Path to the configuration file

    Returns:
        dict: Configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        json.JSONDecodeError: If config file is not valid JSON
        ValueError: If required configuration fields are missing or invalid
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = json.load(f)

    _validate_config(config)

    return config


def save_config(config: Dict, config_path: str = DEFAULT_CONFIG_PATH) -> None:
    """
    Save configuration to a JSON file.

    Args:
        config (dict): Configuration dictionary to save
        config_path (str): Path to the configuration file

    Raises:
        IOError: If the file cannot be written
        ValueError: If required configuration fields are missing
    """
    _validate_config(config)

    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config, f, indent=2)


def _validate_config(config: Dict) -> None:
    """
    Validate configuration fields.

    Args:
        config (dict): Configuration dictionary to validate

    Raises:
        ValueError: If required fields are missing or invalid
    """
    if not isinstance(config, dict):
        raise ValueError("Configuration must be a JSON object")

    if 'dataset_path' not in config:
        raise ValueError("Required configuration field missing: dataset_path")

    if not isinstance(config['dataset_path'], str):
        raise ValueError("Configuration field 'dataset_path' must be a string")

    if not config['dataset_path'].strip():
        raise ValueError("Configuration field 'dataset_path' cannot be empty")

    if 'k' in config:
        k = config['k']
        if isinstance(k, bool) or not isinstance(k, int):
            raise ValueError("Configuration field 'k' must be an integer")
        if k <= 0:
            raise ValueError("Configuration field 'k' must be positive")

    if 'query' in config:
        query = config['query']
        if not isinstance(query, list) or len(query) != NUM_FEATURES:
            raise ValueError(f"Configuration field 'query' must be a list of {NUM_FEATURES} numbers")
        for value in query:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError("Configuration field 'query' must contain only numbers")

    if 'log_level' in config:
        if config['log_level'] not in LOG_LEVELS:
            raise ValueError(f"Configuration field 'log_level' must be one of {', '.join(LOG_LEVELS)}")

