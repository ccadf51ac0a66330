import inspect
import logging
from collections.abc import Mapping
from typing import Any, List, Optional

import strawberry
from strawberry.scalars import ID
from strawberry.types import Info

from relay_bundle.core.errors import NotFound
from relay_bundle.api.graphql.relay.global_id import decode_global_id
from relay_bundle.api.graphql.relay.items import get_field, with_field
from relay_bundle.api.graphql.relay.manager import TypeManager
from relay_bundle.api.graphql.relay.objects import build_object_type
from relay_bundle.api.graphql.relay.relay_type import RelayType

logger = logging.getLogger(__name__)


def tag_node(relay_type: RelayType, obj: Any) -> Any:
    """Mark ``obj`` with its type so the Node interface can resolve it.

    Mappings are copied with a ``__typename`` key. Objects of types without a
    model get the attribute set in place, since nothing else tells such types
    apart.
    """
    if obj is None or get_field(obj, "__typename") is not None:
        return obj
    if isinstance(obj, Mapping) or relay_type.model is None:
        return with_field(obj, "__typename", relay_type.name)
    return obj


async def _await_node(relay_type: RelayType, pending) -> Any:
    return tag_node(relay_type, await pending)


def resolve_node(manager: TypeManager, id: str, info: Optional[Info] = None) -> Any:
    """Fetch any registered object by its global id.

    Raises:
        MalformedIdentifier: ``id`` is not a global id.
        NotFound: the id names an unknown type, or the type raised it.
    """
    type_name, raw_id = decode_global_id(id)
    try:
        relay_type = manager.relay_type(type_name)
    except KeyError:
        logger.info(f"Global id {id!r} refers to unknown type '{type_name}'")
        raise NotFound(type_name, raw_id) from None

    result = relay_type.resolve_by_id(raw_id, info)
    if inspect.isawaitable(result):
        return _await_node(relay_type, result)
    return tag_node(relay_type, result)


def node_query_type(manager: TypeManager) -> type:
    node = manager.type("node")

    def resolve_node_field(info: Info, id: ID):
        return resolve_node(manager, id, info)

    def resolve_nodes_field(info: Info, ids: List[ID]):
        return [resolve_node(manager, id, info) for id in ids]

    return build_object_type(
        "NodeQuery",
        {
            "node": (Optional[node], strawberry.field(
                resolver=resolve_node_field, description="Fetches an object given its ID.")),
            "nodes": (List[Optional[node]], strawberry.field(
                resolver=resolve_nodes_field, description="Fetches objects given their IDs.")),
        },
    )


def build_schema(manager: TypeManager, query: Optional[type] = None, **kwargs) -> strawberry.Schema:
    """Schema with the node fields, ``query``'s fields and every relay type."""
    bases = (node_query_type(manager),) + ((query,) if query is not None else ())
    Query = strawberry.type(type("Query", bases, {"__module__": __name__, "__annotations__": {}}))
    return strawberry.Schema(query=Query, types=manager.types(), **kwargs)
