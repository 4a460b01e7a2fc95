"""Error taxonomy shared by the stores, the meal service and the HTTP layer.

Each error carries the HTTP status it maps to; the API layer registers a
single handler for ``MealLogError`` that renders ``{"error": message}``.
"""


class MealLogError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MealLogError):
    """A required field is missing or a date/time value cannot be parsed."""
    status_code = 400


class NotFoundError(MealLogError):
    """The referenced date/index (or template) does not exist."""
    status_code = 404


class StorageError(MealLogError):
    """Reading or writing a persisted JSON document failed."""
    status_code = 500


class CacheInstallError(MealLogError):
    """A manifest asset could not be fetched while installing the offline cache."""


__all__ = ['MealLogError', 'ValidationError', 'NotFoundError', 'StorageError', 'CacheInstallError']
