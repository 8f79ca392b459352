class InvalidArgument(ValueError):
    """Raised when a numeric input is outside its documented domain (durations, prices)."""
    pass


class BookingTransitionError(RuntimeError):
    """Raised when a workflow event arrives in a state that does not define it."""
    pass


class StationNotFound(LookupError):
    """Raised when a station id does not resolve in the current catalog."""
    pass


class StationDirectoryError(RuntimeError):
    """Raised when the station directory cannot be reached or returns bad data."""
    pass


class PaymentGatewayError(RuntimeError):
    """Raised by payment adapters on transport failures (timeouts, 5xx, bad payloads)."""
    pass
