class SalesmanError(Exception):
    """Base class for errors raised by salesman_ga."""


class FormatError(SalesmanError, ValueError):
    """Distance table input is incomplete or not numeric."""


class ValidationError(SalesmanError, ValueError):
    """Distance table input parsed but describes an invalid table."""


class RangeError(SalesmanError, IndexError):
    """City index outside [0, size)."""


class ArgumentError(SalesmanError, ValueError):
    """Invalid argument passed to a core operation."""
