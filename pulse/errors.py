"""Error taxonomy for the pulse scheduler."""


class PulseError(Exception):
    """Base exception for pulse."""


class ConfigurationError(PulseError):
    """Raised when scheduler options are malformed. Construction is aborted."""


class TypeRequiredError(ConfigurationError, TypeError):
    """Raised when a required option is missing."""


class TypeMismatchError(ConfigurationError, TypeError):
    """Raised when an option has the wrong runtime type."""


class RangeError(ConfigurationError, ValueError):
    """Raised when a numeric option lies outside its allowed bounds."""


class FatalHookError(PulseError):
    """Raised out of a cycle when a post-processing hook fails.

    The scheduler is forced to the stopped state before this propagates.
    The original exception is available as ``__cause__``.
    """

    def __init__(self, message: str, pulse: object | None = None) -> None:
        super().__init__(message)
        self.pulse = pulse
