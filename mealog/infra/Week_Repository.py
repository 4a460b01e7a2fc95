import logging
import threading
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import Dict, List, Optional

from mealog.domain.Week import WeekBucket
from mealog.infra.json_files import read_json, write_json
from mealog.infra.paths import DATA_DIR, week_path
from mealog.utilities.dates import DateLike, week_bucket_key, week_file_name
from mealog.utilities.errors import StorageError

logger = logging.getLogger(__name__)


class WeekRepository:
    """One JSON file per Monday..Sunday week, named after the week key.

    A missing file is an empty week. Saves overwrite the whole file.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def path_for(self, value: DateLike) -> Path:
        return week_path(self.data_dir, week_file_name(value))

    def load(self, value: DateLike) -> WeekBucket:
        key = week_bucket_key(value)
        path = self.path_for(value)
        data = read_json(path, dict)
        if not isinstance(data, dict):
            logger.error("Week file %s does not hold a JSON object", path)
            raise StorageError(f"Malformed data file: {path.name}")
        try:
            return WeekBucket.from_dict(data, key=key)
        except ValueError as e:
            logger.error("Malformed week file %s: %s", path, e)
            raise StorageError(f"Malformed data file: {path.name}") from e

    def save(self, value: DateLike, bucket: WeekBucket) -> None:
        path = self.path_for(value)
        write_json(path, bucket.to_dict())
        logger.debug("Saved %s (%d meals)", path.name, len(bucket))

    def _lock_for(self, key: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(key, threading.Lock())

    @contextmanager
    def lock(self, *values: DateLike):
        """Serialize load/mutate/save for the weeks containing the given dates.

        Locks are taken in sorted key order so a cross-week move cannot deadlock.
        """
        keys = sorted({week_bucket_key(v) for v in values})
        with ExitStack() as stack:
            for key in keys:
                stack.enter_context(self._lock_for(key))
            yield

    def list_weeks(self) -> List[str]:
        if not self.data_dir.exists():
            return []
        return sorted(p.stem for p in self.data_dir.glob('week_*_to_*.json'))
