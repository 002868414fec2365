"""Exceptions raised by the leave optimizer."""


class PontError(Exception):
    """Base error for the leave optimizer."""


class InvalidDate(PontError, ValueError):
    """Raised when a date is malformed or outside the calendar range."""


class InvalidYear(PontError, ValueError):
    """Raised when the target year is not a usable calendar year."""


class NegativeQuota(PontError, ValueError):
    """Raised when a negative leave quota is requested."""


class HolidaySourceError(PontError):
    """Raised when a holiday file cannot be read."""


class ConfigError(PontError):
    """Raised when a configuration file is missing or invalid."""
