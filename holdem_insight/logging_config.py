"""
logging_config.py

Global logger configuration - import 'logger' directly from this module
"""
import logging
import os
from datetime import datetime

from holdem_insight.settings import config

_log_settings = config['logging']

handlers = [logging.StreamHandler()]

if _log_settings.get('log_to_file'):
    # Create logs directory
    log_dir = _log_settings.get('log_dir', 'logs')
    os.makedirs(log_dir, exist_ok=True)

    # Create timestamped log file
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_filename = os.path.join(log_dir, f"holdem_insight_{timestamp}.log")
    handlers.append(logging.FileHandler(log_filename, encoding="utf-8"))

# Configure logging
logging.basicConfig(
    level=getattr(logging, str(_log_settings.get('level', 'INFO')).upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=handlers
)

# Create and export a global logger
logger = logging.getLogger("holdem_insight")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
