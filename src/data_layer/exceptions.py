"""Custom exceptions for the nutrition lookup service."""


class ConfigurationError(Exception):
    """Raised when the settings file exists but cannot be used."""

    def __init__(self, path: str, reason: str):
        """Initialize exception with the offending path.

        Args:
            path: Settings file path
            reason: Why the file was rejected
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid settings file '{path}': {reason}")


class InvalidQuantityError(ValueError):
    """Raised when a quantity cannot be used for nutrition scaling."""

    def __init__(self, quantity, message: str):
        self.quantity = quantity
        self.message = message
        super().__init__(f"Invalid quantity {quantity!r}: {message}")
