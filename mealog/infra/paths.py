from pathlib import Path

from mealog.utilities.config import DATA_DIR, STATIC_DIR

# Centralized paths for data files (single source of truth)
TEMPLATES_FILE_NAME = 'templates.json'
INDEX_HTML = STATIC_DIR / 'index.html'


def week_path(data_dir: Path, file_name: str) -> Path:
    return Path(data_dir) / file_name


__all__ = ['DATA_DIR', 'STATIC_DIR', 'TEMPLATES_FILE_NAME', 'INDEX_HTML', 'week_path']
