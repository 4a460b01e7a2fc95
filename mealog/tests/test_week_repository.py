import json
import tempfile
import unittest
from pathlib import Path

from mealog.domain.Meal import Meal
from mealog.domain.Week import WeekBucket
from mealog.infra.Week_Repository import WeekRepository
from mealog.logic.meals.service import MealService
from mealog.utilities.errors import NotFoundError, StorageError


class TestWeekRepository(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name) / "data"
        self.repo = WeekRepository(self.data_dir)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_week_is_empty(self):
        bucket = self.repo.load("2024-06-12")
        self.assertEqual(bucket.to_dict(), {})
        self.assertEqual(bucket.key, "week_2024-06-10_to_2024-06-16")

    def test_round_trip(self):
        bucket = WeekBucket()
        bucket.add("2024-06-10", Meal.create("2024-06-10", "08:00", "oats"))
        bucket.add("2024-06-12", Meal.create("2024-06-12", "19:00", "soup"))
        self.repo.save("2024-06-11", bucket)
        self.assertEqual(self.repo.load("2024-06-16"), bucket)

    def test_file_is_pretty_printed_and_named_by_week(self):
        bucket = WeekBucket()
        bucket.add("2024-06-10", Meal("08:00", "овсянка", 1))
        self.repo.save("2024-06-10", bucket)
        path = self.data_dir / "week_2024-06-10_to_2024-06-16.json"
        text = path.read_text(encoding="utf-8")
        self.assertIn("\n  ", text)
        self.assertIn("овсянка", text)
        self.assertEqual(self.repo.list_weeks(), ["week_2024-06-10_to_2024-06-16"])

    def test_malformed_file_is_storage_error(self):
        self.data_dir.mkdir(parents=True)
        (self.data_dir / "week_2024-06-10_to_2024-06-16.json").write_text("{oops", encoding="utf-8")
        with self.assertRaises(StorageError):
            self.repo.load("2024-06-10")

    def _write_week(self, document):
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self.data_dir / "week_2024-06-10_to_2024-06-16.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    def test_malformed_entries_are_storage_errors(self):
        cases = [
            {"2024-06-11": "corrupt"},
            {"2024-06-12": ["junk"]},
            {"2024-06-12": [{"time": "x", "description": "oats", "timestamp": "nan"}]},
            {"2024-06-12": [{"time": "08:00", "description": "oats", "timestamp": None}]},
            {"2024-06-12": [{"time": "08:00", "timestamp": 1}]},
        ]
        for document in cases:
            with self.subTest(document=document):
                self._write_week(document)
                with self.assertRaises(StorageError):
                    self.repo.load("2024-06-10")

    def test_malformed_week_is_not_overwritten(self):
        document = {"2024-06-11": "corrupt", "2024-06-12": [{"time": "08:00", "description": "oats", "timestamp": 1}]}
        path = self._write_week(document)
        service = MealService(self.repo)
        with self.assertRaises(StorageError):
            service.create("2024-06-12", "09:00", "tea")
        self.assertEqual(json.loads(path.read_text(encoding="utf-8")), document)

    def test_non_object_document_is_storage_error(self):
        self.data_dir.mkdir(parents=True)
        (self.data_dir / "week_2024-06-10_to_2024-06-16.json").write_text(json.dumps([1, 2]), encoding="utf-8")
        with self.assertRaises(StorageError):
            self.repo.load("2024-06-10")


class TestWeekBucket(unittest.TestCase):
    def test_equal_timestamps_keep_insertion_order(self):
        bucket = WeekBucket()
        bucket.add("2024-06-10", Meal("08:00", "first", 100))
        bucket.add("2024-06-10", Meal("07:00", "early", 50))
        bucket.add("2024-06-10", Meal("08:00", "second", 100))
        self.assertEqual([m.description for m in bucket.meals_for("2024-06-10")], ["early", "first", "second"])

    def test_remove_shifts_and_drops_empty_day(self):
        bucket = WeekBucket()
        bucket.add("2024-06-10", Meal("07:00", "a", 1))
        bucket.add("2024-06-10", Meal("08:00", "b", 2))
        bucket.add("2024-06-10", Meal("09:00", "c", 3))
        self.assertEqual(bucket.remove("2024-06-10", 1).description, "b")
        self.assertEqual([m.description for m in bucket.meals_for("2024-06-10")], ["a", "c"])
        bucket.remove("2024-06-10", 0)
        bucket.remove("2024-06-10", 0)
        self.assertNotIn("2024-06-10", bucket)

    def test_remove_out_of_range(self):
        bucket = WeekBucket()
        bucket.add("2024-06-10", Meal("07:00", "a", 1))
        with self.assertRaises(NotFoundError):
            bucket.remove("2024-06-10", 1)
        with self.assertRaises(NotFoundError):
            bucket.remove("2024-06-11", 0)
        with self.assertRaises(NotFoundError):
            bucket.remove("2024-06-10", -1)


if __name__ == '__main__':
    unittest.main()
