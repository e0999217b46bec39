"""Custom exception hierarchy for ROM analysis errors."""


class ROMError(Exception):
    """Base exception for ROM analysis errors."""


class LandmarkFrameError(ROMError, ValueError):
    """Raised when landmark input does not form a valid 21-point frame."""


class DegenerateGeometryError(ROMError):
    """Base exception for zero-length geometry that makes a metric undefined."""


class DegenerateVectorError(DegenerateGeometryError):
    """Raised when an angle is requested for a zero-length vector."""


class ReferenceLengthError(DegenerateGeometryError):
    """Raised when the wrist to middle-MCP reference length is zero."""


class ConfigurationError(ROMError):
    """Base exception for invalid configuration values."""


class AnalyzerConfigurationError(ConfigurationError):
    """Raised when analyzer configuration is invalid."""


class SchedulerConfigurationError(ConfigurationError):
    """Raised when a repeat run is requested with invalid arguments."""
