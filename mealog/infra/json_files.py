"""Whole-document JSON persistence shared by the week and template repositories."""
import json
import logging
from pathlib import Path
from typing import Any, Callable

from mealog.utilities.errors import StorageError

logger = logging.getLogger(__name__)


def read_json(path: Path, default: Callable[[], Any]) -> Any:
    """Return the parsed document, or default() when the file does not exist.

    Malformed content is a StorageError, never treated as absent.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        return default()
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", path, e)
        raise StorageError(f"Malformed data file: {Path(path).name}") from e
    except OSError as e:
        logger.error("Failed to read %s: %s", path, e)
        raise StorageError(f"Could not read data file: {Path(path).name}") from e


def write_json(path: Path, document: Any) -> None:
    """Overwrite path with a pretty-printed document. Not crash safe."""
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
    except (OSError, TypeError, ValueError) as e:
        logger.error("Failed to write %s: %s", path, e)
        raise StorageError(f"Could not write data file: {Path(path).name}") from e
