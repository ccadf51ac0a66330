import logging
from typing import Any, Dict, List, Optional, Tuple

from relay_bundle.core.config import Settings, get_settings
from relay_bundle.api.graphql.common.types import Node, PageInfo
from relay_bundle.api.graphql.relay.connection import ConnectionSpec, connection_type, edge_type
from relay_bundle.api.graphql.relay.objects import declare_object_type, unwrap_list
from relay_bundle.api.graphql.relay.relay_type import RelayType, build_relay_type

logger = logging.getLogger(__name__)


class TypeManager:
    """Registry of the types a relay schema is assembled from.

    Relay types are built on first lookup and cached, so every type is
    created once per schema and shared by all requests.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._types: Dict[str, Any] = {"node": Node, "pageInfo": PageInfo}
        self._relay_types: Dict[str, RelayType] = {}
        self._connections: Dict[str, Tuple[tuple, type]] = {}

    def register(self, relay_type: RelayType) -> None:
        name = relay_type.global_type_name
        if not name:
            raise ValueError(f"{type(relay_type).__name__} has no name")
        if name in self._types or name in self._relay_types:
            raise ValueError(f"Type '{name}' is already registered")
        self._relay_types[name] = relay_type

    def relay_type(self, name: str) -> RelayType:
        try:
            return self._relay_types[name]
        except KeyError:
            raise KeyError(f"Unknown relay type '{name}'") from None

    def type(self, name: str) -> Any:
        if name in self._types:
            return self._types[name]

        relay_type = self.relay_type(name)
        # Registered before its fields are built so connections back to it,
        # directly or through other types, get the same class
        declared = declare_object_type(relay_type.name, tuple(relay_type.interfaces(self)))
        self._types[name] = declared
        try:
            built = build_relay_type(relay_type, self, cls=declared)
        except Exception:
            del self._types[name]
            raise

        logger.debug(f"Built relay type {relay_type.name}")
        return built

    def types(self) -> List[Any]:
        return [self.type(name) for name in self._relay_types]

    def connection_type(self, name: str, spec: ConnectionSpec) -> type:
        """Connection type for relation ``name``, shared by every type declaring it."""
        element = self.type(spec.type) if isinstance(spec.type, str) else unwrap_list(spec.type)
        key = (element, spec.inject_cursor, spec.resolve_cursor)

        cached = self._connections.get(name)
        if cached is not None:
            if cached[0] != key:
                raise ValueError(f"Connection '{name}' is declared with different element types or hooks")
            return cached[1]

        edge = edge_type(name, element, spec.resolve_cursor)
        connection = connection_type(
            name, edge, self.type("pageInfo"), spec.inject_cursor, spec.resolve_cursor,
        )
        self._connections[name] = (key, connection)
        return connection
