class OrderServiceError(Exception):
    """Base class for failures raised by the order store and service."""


class NotFound(OrderServiceError):
    """A referenced record does not exist."""


class ValidationError(OrderServiceError):
    """Input is malformed or out of range."""


class StoreUnavailable(OrderServiceError):
    """The database could not be reached."""
