class ConfigurationError(Exception):
    """Raised when the planning configuration is invalid. Never silently defaulted."""

    pass


class InvalidRegionError(ConfigurationError):
    """Raised when a region or subregion code is unknown or not applicable."""

    pass


class InvalidYearRangeError(ConfigurationError):
    """Raised when the year range bounds are not chronologically ordered."""

    pass


class InvalidShiftError(ConfigurationError):
    """Raised when the shift configuration yields a non-positive number of hours per day."""

    pass


class InvalidDateError(ConfigurationError):
    """Raised when a date cannot be parsed or does not exist in the plan."""

    pass


class InvalidModuleError(ConfigurationError):
    """Raised when the module feed is malformed (duplicate ids, negative hours)."""

    pass


class UnknownModuleError(ConfigurationError):
    """Raised when a module id is not part of the plan."""

    pass


class CascadeAmbiguityError(Exception):
    """Raised when no working day can be found within the look-ahead window."""

    pass


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    UnknownModuleError: 404,
    InvalidRegionError: 400,
    InvalidYearRangeError: 400,
    InvalidShiftError: 400,
    InvalidDateError: 400,
    InvalidModuleError: 400,
    ConfigurationError: 400,
    CascadeAmbiguityError: 422,
}


def status_code_for(error: Exception) -> int:
    """HTTP status for a custom error, resolving subclasses through the MRO."""
    for cls in type(error).__mro__:
        if cls in CUSTOM_ERRORS:
            return CUSTOM_ERRORS[cls]
    return 500
