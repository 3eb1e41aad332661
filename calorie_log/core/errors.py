"""Errors raised by the calorie log."""


class CalorieLogError(Exception):
    """Base class for all calorie log errors."""


class NoDaysRecorded(CalorieLogError):
    """The registry holds no days, so there is no current day."""

    def __init__(self) -> None:
        super().__init__("No days recorded")


class DateNotFound(CalorieLogError):
    """No recorded day matches the requested date."""

    def __init__(self, date) -> None:
        self.date = date
        super().__init__(f"Date not found: {date}")


class InvalidIndex(CalorieLogError):
    """A food index is outside the current day's food list."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Invalid food index {index} (day has {size} foods)")


class PersistenceFailure(CalorieLogError):
    """Reading or writing the day log file failed."""


class ParseFailure(CalorieLogError):
    """Persisted data or user input could not be parsed."""


class LookupFailure(CalorieLogError):
    """The online nutrition lookup failed or returned a bad response."""
