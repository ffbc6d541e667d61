class ImgdsError(Exception):
    """Base class for dataset builder failures."""


class ConfigurationError(ImgdsError, ValueError):
    """Raised for bad CLI arguments, bad config values, or an unusable image tree."""


class DecodeError(ImgdsError):
    """Raised when a single image cannot be read or decoded."""


class DatasetIOError(ImgdsError, OSError):
    """Raised when the dataset file cannot be written or opened."""


class DatasetFormatError(ImgdsError, ValueError):
    """Raised when a dataset file is truncated or its sections are inconsistent."""


class ValidationError(ImgdsError, ValueError):
    """Raised for out-of-range numeric parameters."""
