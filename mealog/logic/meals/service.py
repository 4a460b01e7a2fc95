"""Meal log operations on top of the week repository.

Meals inside a day are addressed by their position, so an index refers to
whatever sits there at the time of the call.
"""
import logging
from typing import Dict, List, Optional

from mealog.domain.Meal import Meal
from mealog.infra.Week_Repository import WeekRepository
from mealog.utilities.dates import DateLike, format_date, same_week
from mealog.utilities.errors import NotFoundError
from mealog.utilities.validators import require_fields

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Date, time and description are required"


class MealService:
    def __init__(self, repo: Optional[WeekRepository] = None):
        self.repo = repo or WeekRepository()

    def list_week(self, value: DateLike) -> Dict[str, List[dict]]:
        return self.repo.load(value).to_dict()

    def list_day(self, date_str: str) -> List[dict]:
        date_str = format_date(date_str)
        bucket = self.repo.load(date_str)
        return [m.to_dict() for m in bucket.meals_for(date_str)]

    def create(self, date_str: Optional[str], time: Optional[str], description: Optional[str]) -> Meal:
        require_fields(MISSING_FIELDS, (date_str, time, description))
        date_str = format_date(date_str)
        meal = Meal.create(date_str, time, description)
        with self.repo.lock(date_str):
            bucket = self.repo.load(date_str)
            bucket.add(date_str, meal)
            self.repo.save(date_str, bucket)
        logger.info("Logged meal on %s at %s", date_str, time)
        return meal

    def update(self, date_str: str, index: int, new_date: Optional[str],
               time: Optional[str], description: Optional[str]) -> Meal:
        """Move the meal at (date_str, index) to new_date with a new time/description.

        The old week is saved before the new week, so a failure on the second
        save leaves the meal removed and not yet re-inserted.
        """
        require_fields(MISSING_FIELDS, (new_date, time, description))
        date_str = format_date(date_str)
        new_date = format_date(new_date)
        meal = Meal.create(new_date, time, description)
        with self.repo.lock(date_str, new_date):
            old_bucket = self.repo.load(date_str)
            old_bucket.remove(date_str, index)
            self.repo.save(date_str, old_bucket)

            if same_week(date_str, new_date):
                new_bucket = old_bucket
            else:
                new_bucket = self.repo.load(new_date)
            new_bucket.add(new_date, meal)
            self.repo.save(new_date, new_bucket)
        logger.info("Moved meal %s[%d] to %s at %s", date_str, index, new_date, time)
        return meal

    def delete(self, date_str: str, index: int) -> Meal:
        date_str = format_date(date_str)
        with self.repo.lock(date_str):
            bucket = self.repo.load(date_str)
            meal = bucket.remove(date_str, index)
            self.repo.save(date_str, bucket)
        logger.info("Deleted meal %s[%d]", date_str, index)
        return meal


def parse_index(raw) -> int:
    """Path indices that are not non-negative integers never match a meal."""
    try:
        index = int(raw)
    except (TypeError, ValueError):
        raise NotFoundError("Meal not found") from None
    if index < 0:
        raise NotFoundError("Meal not found")
    return index


__all__ = ['MealService', 'parse_index', 'MISSING_FIELDS']
