# core/exceptions.py

class WitsenhausenError(Exception):
    """Base exception for cost engine errors."""
    pass

class ParameterError(WitsenhausenError):
    """Raised when (k, sigma) or a numeric setting is outside its domain."""
    pass

class ConfigError(WitsenhausenError):
    """Raised when a grid configuration cannot be read or fails validation."""
    pass

class GridFormatError(WitsenhausenError):
    """Raised when a persisted cost table does not match its axis metadata."""
    pass

class NotTabulatedError(WitsenhausenError):
    """Raised when a lookup falls outside the table or hits a failed cell."""
    pass
