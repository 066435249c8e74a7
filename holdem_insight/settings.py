"""
settings.py

Load config.yaml (or the file named by HOLDEM_INSIGHT_CONFIG) into a plain dict
"""
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
import yaml

load_dotenv()

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), 'config.yaml')

DEFAULTS: Dict[str, Dict[str, Any]] = {
    'simulation': {
        'samples': 50,
        'batch_size': 10,
        'max_opponents': 8,
        'runouts': 0,
        'preflop_runouts': 25,
        'vs_hand_iterations': 1000,
    },
    'logging': {
        'level': 'INFO',
        'log_to_file': False,
        'log_dir': 'logs',
    },
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
    """
    Read the YAML config and layer it over DEFAULTS.
    Missing sections or keys fall back to the defaults.
    """
    config_path = config_path or os.getenv('HOLDEM_INSIGHT_CONFIG') or DEFAULT_CONFIG_PATH
    with open(config_path, 'r', encoding='utf-8') as f:
        loaded = yaml.safe_load(f) or {}

    merged = {section: dict(values) for section, values in DEFAULTS.items()}
    for section, values in loaded.items():
        if isinstance(values, dict):
            merged.setdefault(section, {}).update(values)
        else:
            merged[section] = values

    env_level = os.getenv('HOLDEM_INSIGHT_LOG_LEVEL')
    if env_level:
        merged['logging']['level'] = env_level.upper()
    return merged


config = load_config()


def simulation_setting(key: str) -> Any:
    return config['simulation'][key]
