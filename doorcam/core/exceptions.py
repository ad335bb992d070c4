class DoorcamError(Exception):
    """Base class for all doorcam errors."""


class DecodeError(DoorcamError):
    """The video container could not be opened or read."""


class ModelUnavailableError(DoorcamError):
    """The object-detection model could not be loaded or run."""


class EmptyInputError(DoorcamError):
    """No observations were available and no synthetic fallback is configured."""
