"""Global object identifiers.

A global id is the base64 encoding of ``"<type name>:<raw id>"``. Cursors use
the same scheme with the type name ``arrayconnection``.
"""
import base64
import binascii
import logging
from typing import Tuple, Union

from relay_bundle.core.errors import InvalidArgument, MalformedIdentifier

logger = logging.getLogger(__name__)

SEPARATOR = ":"


def encode_global_id(type_name: str, raw_id: Union[str, int]) -> str:
    """Encode a type name and raw id into an opaque token."""
    if SEPARATOR in type_name:
        raise ValueError(f"Type name {type_name!r} must not contain {SEPARATOR!r}")
    value = f"{type_name}{SEPARATOR}{raw_id}"
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def decode_global_id(token: str) -> Tuple[str, str]:
    """Decode a token into its ``(type name, raw id)`` pair.

    Raises:
        MalformedIdentifier: the token is not valid base64 of ``type:id``.
    """
    if not isinstance(token, str):
        raise MalformedIdentifier(token, "expected a string")
    try:
        value = base64.b64decode(token.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError) as e:
        raise MalformedIdentifier(token) from e

    type_name, separator, raw_id = value.partition(SEPARATOR)
    if not separator:
        raise MalformedIdentifier(token, "missing separator")
    if not type_name:
        raise MalformedIdentifier(token, "empty type name")
    return type_name, raw_id


def decode_relay_id(token: str) -> str:
    return decode_global_id(token)[1]


def decode_relay_type(token: str) -> str:
    return decode_global_id(token)[0]


def get_cursor_id(cursor: str, strict: bool = False) -> int:
    """Extract the integer position stored in a cursor.

    Non-numeric payloads fall back to ``0`` unless ``strict`` is set, in which
    case they raise InvalidArgument.
    """
    raw_id = decode_relay_id(cursor)
    try:
        return int(raw_id)
    except ValueError:
        if strict:
            raise InvalidArgument("after", cursor, "cursor does not hold a position")
        logger.warning(f"Cursor {cursor!r} holds non-numeric value {raw_id!r}, using offset 0")
        return 0
