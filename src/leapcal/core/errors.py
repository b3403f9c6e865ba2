class LeapcalError(Exception):
    """Base error."""

class LeapFileError(LeapcalError):
    """Raised when a leap-second file cannot be opened or read."""

class UninitializedWarning(UserWarning):
    """Emitted when the default context is used before leapcal.init()."""
