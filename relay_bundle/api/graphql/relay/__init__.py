# Relay connections and global object identification on top of Strawberry
from relay_bundle.api.graphql.relay.connection import ConnectionSpec
from relay_bundle.api.graphql.relay.global_id import (
    decode_global_id,
    decode_relay_id,
    decode_relay_type,
    encode_global_id,
    get_cursor_id,
)
from relay_bundle.api.graphql.relay.manager import TypeManager
from relay_bundle.api.graphql.relay.pagination import Page, inject_cursor, paginate, resolve_cursor
from relay_bundle.api.graphql.relay.relay_type import FieldSpec, RelayType
from relay_bundle.api.graphql.relay.schema import build_schema

__all__ = [
    'ConnectionSpec', 'FieldSpec', 'RelayType', 'TypeManager', 'Page', 'build_schema',
    'encode_global_id', 'decode_global_id', 'decode_relay_id', 'decode_relay_type', 'get_cursor_id',
    'paginate', 'inject_cursor', 'resolve_cursor',
]
