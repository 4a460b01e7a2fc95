"""Meal domain entity: time of day, free-text description and the derived epoch-millis timestamp."""
from mealog.utilities.dates import meal_timestamp


class Meal:
    def __init__(self, time: str = "", description: str = "", timestamp: int = 0):
        self.time = time
        self.description = description
        self.timestamp = timestamp

    @classmethod
    def create(cls, date_str: str, time: str, description: str) -> "Meal":
        '''Builds a meal logged on date_str, computing its timestamp.'''
        return cls(time, description, meal_timestamp(date_str, time))

    def __str__(self) -> str:
        return f"{self.time} - {self.description}"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Meal):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates a Meal from a stored dictionary. Raises ValueError on malformed entries.'''
        if not isinstance(data, dict):
            raise ValueError(f"meal entry must be an object, got {type(data).__name__}")
        time, description, timestamp = data.get("time"), data.get("description"), data.get("timestamp")
        if not isinstance(time, str) or not isinstance(description, str):
            raise ValueError("meal time and description must be strings")
        # bool is an int subclass but never a valid timestamp
        if not isinstance(timestamp, int) or isinstance(timestamp, bool):
            raise ValueError(f"meal timestamp must be an integer, got {timestamp!r}")
        return Meal(time, description, timestamp)

    def to_dict(self):
        return {
            "time": self.time,
            "description": self.description,
            "timestamp": self.timestamp,
        }
