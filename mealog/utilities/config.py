"""Configuration management for the Meal Log application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '3006'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Date Formats
DATE_FORMAT: Final[str] = "%Y-%m-%d"
TIME_FORMATS: Final[tuple] = ("%H:%M", "%H:%M:%S")

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('MEALOG_DATA_DIR', str(BASE_DIR / 'data'))).resolve()
STATIC_DIR: Final[Path] = Path(os.getenv('MEALOG_STATIC_DIR', str(BASE_DIR / 'static'))).resolve()

# Offline cache
OFFLINE_CACHE_NAME: Final[str] = os.getenv('OFFLINE_CACHE_NAME', 'media-loader-cache-v12')
OFFLINE_CACHE_DIR: Final[Path] = Path(os.getenv('OFFLINE_CACHE_DIR', str(BASE_DIR / '.offline-cache'))).resolve()
OFFLINE_MANIFEST: Final[tuple] = (
    './index.html',
    './manifest.json',
    './icons/192.png',
    './icons/512.png',
    './audio/finish.mp3',
    './audio/interval.mp3',
)
