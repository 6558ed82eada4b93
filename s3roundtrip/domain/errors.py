from __future__ import annotations


class RoundTripError(Exception):
    """Base class for failures that abort a round-trip run."""


class ConfigurationError(RoundTripError):
    pass


class RemoteError(RoundTripError):
    def __init__(self, operation: str, message: str, code: str | None = None) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.message = message
        self.code = code


class ConsistencyError(RoundTripError):
    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"number of bytes received does not match: {expected} vs {received}")
        self.expected = expected
        self.received = received
