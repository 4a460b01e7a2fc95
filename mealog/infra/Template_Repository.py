"""Template repository (file persistence of reusable meal descriptions)."""
import logging
import threading
from pathlib import Path
from typing import Optional

from mealog.domain.Template import TemplateRecord
from mealog.infra.json_files import read_json, write_json
from mealog.infra.paths import DATA_DIR, TEMPLATES_FILE_NAME
from mealog.utilities.errors import StorageError
from mealog.utilities.validators import require_fields

logger = logging.getLogger(__name__)


def _empty_record():
    return {"templates": {}, "usage": {}}


class TemplateRepository:
    def __init__(self, data_dir: Optional[Path] = None):
        self.path = (Path(data_dir) if data_dir is not None else DATA_DIR) / TEMPLATES_FILE_NAME
        self._lock = threading.Lock()

    def load(self) -> TemplateRecord:
        data = read_json(self.path, _empty_record)
        if not isinstance(data, dict):
            logger.error("Templates file %s does not hold a JSON object", self.path)
            raise StorageError(f"Malformed data file: {self.path.name}")
        try:
            return TemplateRecord.from_dict(data)
        except ValueError as e:
            logger.error("Malformed templates file %s: %s", self.path, e)
            raise StorageError(f"Malformed data file: {self.path.name}") from e

    def save(self, record: TemplateRecord) -> None:
        write_json(self.path, record.to_dict())

    def upsert(self, name: str, description: str) -> TemplateRecord:
        """Set templates[name] and bump usage[name], then persist the whole record."""
        require_fields("Template name and description are required", (name, description))
        with self._lock:
            record = self.load()
            record.upsert(name, description)
            self.save(record)
        logger.info("Saved template %r (used %d times)", name, record.usage[name])
        return record
