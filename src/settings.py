"""
Settings Module for Chebyshev Path Visualizer

Provides persistent storage for user preferences using JSON.
Settings are stored in config.json in the working directory.
The Groq API key is read from the environment and never saved.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Environment variable holding the text-generation API key
API_KEY_ENV = "GROQ_API_KEY"

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "language": "en",
    "explanation_provider": "groq",
    "groq_model": "deepseek-r1-distill-llama-70b",
    "request_timeout_sec": 30.0,
    "cache_ttl_hours": 24,
    "data_dir": "data",
}


def load_settings() -> Dict[str, Any]:
    """
    Load settings from config.json.

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    if not SETTINGS_FILE.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(SETTINGS_FILE, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError("settings root must be an object")

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any]) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
    """
    try:
        with open(SETTINGS_FILE, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def get_api_key() -> Optional[str]:
    """
    Read the text-generation API key from the environment.

    Returns:
        The key, or None if unset or blank
    """
    key = os.environ.get(API_KEY_ENV, "").strip()
    return key or None


def data_path(settings: Dict[str, Any], filename: str) -> Path:
    """
    Resolve a file inside the configured data directory.

    Args:
        settings: Loaded settings
        filename: File name within the data directory

    Returns:
        Path to the file (directory is not created here)
    """
    return Path(settings.get("data_dir", DEFAULT_SETTINGS["data_dir"])) / filename
