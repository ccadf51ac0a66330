"""Connection and edge types for relations declared by relay types.

For a relation ``products`` this builds::

    type ProductsEdge {
      node: Product
      cursor: String!
    }

    type ProductsConnection {
      edges: [ProductsEdge]
      pageInfo: PageInfo!
      totalCount: Int!
    }

and a ``products(first: Int, after: String): ProductsConnection`` field whose
resolver pages the relation read off the parent object.
"""
import inspect
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import strawberry
from strawberry.types import Info

from relay_bundle.api.graphql.relay.items import get_field
from relay_bundle.api.graphql.relay.objects import FieldDefinition, build_object_type, ucfirst, unwrap_list
from relay_bundle.api.graphql.relay.pagination import inject_cursor as default_inject_cursor
from relay_bundle.api.graphql.relay.pagination import paginate
from relay_bundle.api.graphql.relay.pagination import resolve_cursor as default_resolve_cursor

logger = logging.getLogger(__name__)

# (source, arguments, info) -> value, the signature of every override hook
Resolver = Callable[[Any, Mapping[str, Any], Optional[Info]], Any]


@dataclass(frozen=True)
class ConnectionSpec:
    """Declaration of one relation of a relay type.

    ``type`` is the element type: a Strawberry type, a ``List[...]`` of one, or
    the registry name of another relay type. ``resolve`` replaces the whole
    pagination step and returns a Page, a page-shaped mapping or the already
    sliced items. ``inject_cursor`` replaces the edges resolver and
    ``resolve_cursor`` the cursor resolver of each edge.
    """
    type: Union[type, str, Any]
    resolve: Optional[Resolver] = None
    inject_cursor: Optional[Resolver] = None
    resolve_cursor: Optional[Resolver] = None
    description: Optional[str] = None


def _edge_cursor(edge: Any, resolve_cursor: Optional[Resolver], info: Optional[Info]) -> str:
    if resolve_cursor is not None:
        return resolve_cursor(edge, {}, info)
    return default_resolve_cursor(edge)


def edge_type(name: str, node_type: Any, resolve_cursor: Optional[Resolver] = None) -> type:
    node_type = unwrap_list(node_type)

    def resolve_node(root):
        return root

    def resolve_edge_cursor(root, info: Info):
        return _edge_cursor(root, resolve_cursor, info)

    return build_object_type(
        f"{ucfirst(name)}Edge",
        {
            "node": (Optional[node_type], strawberry.field(
                resolver=resolve_node, description="The item at the end of the edge.")),
            "cursor": (str, strawberry.field(
                resolver=resolve_edge_cursor, description="A cursor for use in pagination.")),
        },
        description="An edge in a connection.",
    )


def connection_type(
    name: str,
    edge: Any,
    page_info_type: type,
    inject_cursor: Optional[Resolver] = None,
    resolve_cursor: Optional[Resolver] = None,
) -> type:
    edge = unwrap_list(edge)

    def resolve_edges(root, info: Info):
        if inject_cursor is not None:
            return inject_cursor(root, {}, info)
        return default_inject_cursor(root)

    def with_edge_cursors(root, edges, info):
        cursors = [_edge_cursor(item, resolve_cursor, info) for item in edges or []]
        return replace(root, edge_cursors=cursors)

    async def await_edge_cursors(root, pending, info):
        return with_edge_cursors(root, await pending, info)

    def resolve_page_info(root, info: Info):
        # Custom hooks may hand out cursors the page formula does not know
        if inject_cursor is None and resolve_cursor is None:
            return root
        edges = resolve_edges(root, info)
        if inspect.isawaitable(edges):
            return await_edge_cursors(root, edges, info)
        return with_edge_cursors(root, edges, info)

    def resolve_total_count(root):
        return get_field(root, "total", 0)

    return build_object_type(
        f"{ucfirst(name)}Connection",
        {
            "edges": (Optional[List[Optional[edge]]], strawberry.field(
                resolver=resolve_edges, description="A list of edges.")),
            "page_info": (page_info_type, strawberry.field(
                resolver=resolve_page_info, description="Information to aid in pagination.")),
            "total_count": (int, strawberry.field(
                resolver=resolve_total_count, description="Number of items in the whole collection.")),
        },
        description="A connection to a list of items.",
    )


def connection_field(name: str, spec: ConnectionSpec, manager) -> FieldDefinition:
    """Field exposing relation ``name`` as a connection with ``first``/``after``."""
    connection = manager.connection_type(name, spec)
    settings = manager.settings

    def to_page(result):
        if result is None:
            return None
        return paginate(result, cursor_strategy=settings.CURSOR_STRATEGY)

    async def await_page(pending):
        return to_page(await pending)

    def resolve_connection(
        root,
        info: Info,
        first: Optional[int] = None,
        after: Optional[str] = None,
    ):
        if spec.resolve is not None:
            args = {key: value for key, value in (("first", first), ("after", after)) if value is not None}
            result = spec.resolve(root, args, info)
            # The hook slices the relation itself; its result is only shaped into a Page
            if inspect.isawaitable(result):
                return await_page(result)
            return to_page(result)
        return paginate(
            get_field(root, name),
            first=first,
            after=after,
            cursor_strategy=settings.CURSOR_STRATEGY,
            strict=settings.STRICT_CURSORS,
            max_page_size=settings.MAX_PAGE_SIZE,
        )

    return Optional[connection], strawberry.field(
        resolver=resolve_connection,
        description=spec.description or "A connection to a list of items.",
    )


def build_connections(relay_type, manager) -> Dict[str, FieldDefinition]:
    """Connection fields for every relation declared by ``relay_type``."""
    fields = {}
    for name, spec in relay_type.connections().items():
        fields[name] = connection_field(name, spec, manager)
        logger.debug(f"Built connection '{name}' on {relay_type.name}")
    return fields
