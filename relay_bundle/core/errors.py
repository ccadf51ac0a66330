"""Errors raised by the relay layer.

They are raised from field resolvers, so Strawberry reports them as errors on
the failing field and keeps the rest of the response.
"""


class RelayError(Exception):
    """Base class for relay errors."""


class MalformedIdentifier(RelayError, ValueError):
    """A global id or cursor could not be decoded."""

    def __init__(self, token, reason: str = "invalid encoding"):
        self.token = token
        self.reason = reason
        super().__init__(f"Malformed identifier {token!r}: {reason}")


class NotFound(RelayError, LookupError):
    """No object exists for the given identifier."""

    def __init__(self, type_name: str, id):
        self.type_name = type_name
        self.id = id
        super().__init__(f"{type_name} with id {id!r} not found")


class InvalidArgument(RelayError, ValueError):
    """A pagination argument is out of range."""

    def __init__(self, argument: str, value, reason: str):
        self.argument = argument
        self.value = value
        super().__init__(f"Invalid value {value!r} for '{argument}': {reason}")
