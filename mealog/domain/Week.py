"""Week domain entity: the meals of one Monday..Sunday span, keyed by date string."""
from typing import Dict, List, Optional

from mealog.domain.Meal import Meal
from mealog.utilities.errors import NotFoundError


class WeekBucket:
    def __init__(self, key: str = "", days: Optional[Dict[str, List[Meal]]] = None):
        self.key = key
        self.days: Dict[str, List[Meal]] = {d: list(m) for d, m in (days or {}).items()}

    def __len__(self):
        return sum(len(m) for m in self.days.values())

    def __contains__(self, date_str):
        return date_str in self.days

    def __eq__(self, other):
        if not isinstance(other, WeekBucket):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def meals_for(self, date_str: str) -> List[Meal]:
        return list(self.days.get(date_str, []))

    def add(self, date_str: str, meal: Meal) -> Meal:
        """Append then re-sort the day by timestamp.

        list.sort is stable, so meals sharing a timestamp keep insertion order.
        """
        day = self.days.setdefault(date_str, [])
        day.append(meal)
        day.sort(key=lambda m: m.timestamp)
        return meal

    def remove(self, date_str: str, index: int) -> Meal:
        """Remove the meal at index; later meals shift down and an emptied day is dropped."""
        day = self.days.get(date_str)
        if not day or index < 0 or index >= len(day):
            raise NotFoundError("Meal not found")
        meal = day.pop(index)
        if not day:
            del self.days[date_str]
        return meal

    @staticmethod
    def from_dict(data, key: str = ""):
        '''Raises ValueError when a day is not a list of meal objects.'''
        days = {}
        for date_str, meals in (data or {}).items():
            if not isinstance(meals, list):
                raise ValueError(f"meals for {date_str} must be a list")
            days[date_str] = [Meal.from_dict(m) for m in meals]
        return WeekBucket(key, days)

    def to_dict(self):
        return {d: [m.to_dict() for m in meals] for d, meals in self.days.items()}
