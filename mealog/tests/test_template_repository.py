import json
import tempfile
import unittest
from pathlib import Path

from mealog.infra.Template_Repository import TemplateRepository
from mealog.utilities.errors import StorageError, ValidationError


class TestTemplateRepository(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)
        self.repo = TemplateRepository(self.data_dir)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_is_empty_record(self):
        self.assertEqual(self.repo.load().to_dict(), {"templates": {}, "usage": {}})

    def test_upsert_twice_counts_usage(self):
        self.repo.upsert("breakfast", "eggs")
        self.repo.upsert("breakfast", "eggs")
        record = self.repo.load()
        self.assertEqual(record.templates["breakfast"], "eggs")
        self.assertEqual(record.usage["breakfast"], 2)

    def test_upsert_overwrites_description(self):
        self.repo.upsert("lunch", "soup")
        self.repo.upsert("lunch", "salad")
        record = self.repo.load()
        self.assertEqual(record.templates, {"lunch": "salad"})
        self.assertEqual(record.usage, {"lunch": 2})

    def test_missing_fields_rejected(self):
        with self.assertRaises(ValidationError):
            self.repo.upsert("", "eggs")
        with self.assertRaises(ValidationError):
            self.repo.upsert("dinner", None)
        self.assertFalse((self.data_dir / "templates.json").exists())

    def test_whitespace_name_is_accepted(self):
        self.repo.upsert(" ", "eggs")
        self.assertEqual(self.repo.load().usage, {" ": 1})

    def test_malformed_sections_are_storage_errors(self):
        cases = [
            {"templates": ["eggs"], "usage": {}},
            {"templates": {"breakfast": 3}, "usage": {}},
            {"templates": {}, "usage": ["breakfast"]},
            {"templates": {"breakfast": "eggs"}, "usage": {"breakfast": "two"}},
            {"templates": {"breakfast": "eggs"}, "usage": {"breakfast": -1}},
        ]
        for document in cases:
            with self.subTest(document=document):
                (self.data_dir / "templates.json").write_text(json.dumps(document), encoding="utf-8")
                with self.assertRaises(StorageError):
                    self.repo.load()

    def test_malformed_usage_is_not_reset_by_upsert(self):
        document = {"templates": {"breakfast": "eggs"}, "usage": {"breakfast": "two"}}
        path = self.data_dir / "templates.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        with self.assertRaises(StorageError):
            self.repo.upsert("breakfast", "eggs")
        self.assertEqual(json.loads(path.read_text(encoding="utf-8")), document)

    def test_malformed_file(self):
        (self.data_dir / "templates.json").write_text("not json", encoding="utf-8")
        with self.assertRaises(StorageError):
            self.repo.load()


if __name__ == '__main__':
    unittest.main()
