"""Forward pagination over in-memory collections.

``paginate`` windows a collection into a ``Page`` from the ``first``/``after``
connection arguments; ``inject_cursor`` then stamps every item of the page
with its cursor, which ``resolve_cursor`` reads back for the edge.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

from relay_bundle.core.errors import InvalidArgument
from relay_bundle.api.graphql.relay.global_id import encode_global_id, get_cursor_id
from relay_bundle.api.graphql.relay.items import get_field, with_field

logger = logging.getLogger(__name__)

CURSOR_PREFIX = "arrayconnection"
CURSOR_FIELD = "relay_cursor"

PAGE_STRATEGY = "page"
OFFSET_STRATEGY = "offset"
CURSOR_STRATEGIES = (PAGE_STRATEGY, OFFSET_STRATEGY)


@dataclass
class Page:
    """One window of a collection, built fresh for every connection request."""
    items: List[Any] = field(default_factory=list)
    total: int = 0
    first: int = 0
    current_page: int = 1
    offset: int = 0
    cursor_strategy: str = PAGE_STRATEGY
    # Cursors of the resolved edges, set when a relation overrides the cursor hooks
    edge_cursors: Optional[List[str]] = field(default=None, repr=False)

    def cursor_at(self, position: int) -> str:
        return encode_cursor(cursor_value(self, position))

    @property
    def has_next_page(self) -> bool:
        return self.offset + len(self.items) < self.total

    @property
    def has_previous_page(self) -> bool:
        return self.offset > 0

    @property
    def start_cursor(self) -> Optional[str]:
        if self.edge_cursors is not None:
            return self.edge_cursors[0] if self.edge_cursors else None
        return self.cursor_at(0) if self.items else None

    @property
    def end_cursor(self) -> Optional[str]:
        if self.edge_cursors is not None:
            return self.edge_cursors[-1] if self.edge_cursors else None
        return self.cursor_at(len(self.items) - 1) if self.items else None


def encode_cursor(value: int) -> str:
    return encode_global_id(CURSOR_PREFIX, value)


def decode_cursor(args: Mapping[str, Any], strict: bool = False) -> int:
    """Decode the ``after`` argument into an offset, ``0`` when absent."""
    after = args.get("after")
    return get_cursor_id(after, strict=strict) if after else 0


def cursor_value(page: Page, position: int) -> int:
    """Value encoded into the cursor of the item at ``position`` in ``page``."""
    if page.cursor_strategy == OFFSET_STRATEGY:
        return page.offset + position + 1
    return (position + 1) * page.current_page


def as_page(value: Any, cursor_strategy: str = PAGE_STRATEGY) -> Optional[Page]:
    """Return ``value`` as a ``Page`` if it is one already, or page-shaped.

    Page-shaped mappings carry ``items`` plus optional ``total``, ``first`` and
    ``currentPage`` (or ``current_page``) and ``offset`` keys. Returns ``None``
    for anything else.
    """
    if isinstance(value, Page):
        return value
    if not isinstance(value, Mapping) or "items" not in value:
        return None

    items = list(get_field(value, "items") or [])
    first = get_field(value, "first", len(items))
    current_page = get_field(value, "currentPage", get_field(value, "current_page", 1))
    offset = get_field(value, "offset", (current_page - 1) * first)
    return Page(
        items=items,
        total=get_field(value, "total", len(items)),
        first=first,
        current_page=current_page,
        offset=offset,
        cursor_strategy=get_field(value, "cursor_strategy", cursor_strategy),
    )


def paginate(
    collection: Optional[Iterable[Any]],
    first: Optional[int] = None,
    after: Optional[str] = None,
    *,
    cursor_strategy: str = PAGE_STRATEGY,
    strict: bool = False,
    max_page_size: Optional[int] = None,
) -> Page:
    """Slice ``collection`` into the page selected by ``first`` and ``after``.

    A ``Page`` or page-shaped mapping is taken as already sliced and returned
    as a ``Page``. Without ``first`` the whole collection is page one. The page
    number is rebuilt from the offset as ``(first + after) // first``, which
    assumes every request of the sequence used the same ``first``.

    Raises:
        InvalidArgument: ``first`` or the decoded ``after`` is negative, or
            ``first`` exceeds ``max_page_size``.
        MalformedIdentifier: ``after`` is not a valid cursor.
    """
    if cursor_strategy not in CURSOR_STRATEGIES:
        raise ValueError(f"Unknown cursor strategy {cursor_strategy!r}")
    page = as_page(collection, cursor_strategy)
    if page is not None:
        return page
    if isinstance(collection, Mapping):
        raise TypeError("Cannot paginate a mapping without an 'items' key")

    items = list(collection) if collection is not None else []
    total = len(items)

    if first is None:
        return Page(
            items=items,
            total=total,
            first=total,
            current_page=1,
            cursor_strategy=cursor_strategy,
        )

    if first < 0:
        raise InvalidArgument("first", first, "must not be negative")
    if max_page_size is not None and first > max_page_size:
        raise InvalidArgument("first", first, f"must not exceed {max_page_size}")

    offset = decode_cursor({"after": after}, strict=strict)
    if offset < 0:
        raise InvalidArgument("after", after, "cursor points before the first item")

    current_page = (first + offset) // first if first and offset else 1
    logger.debug(f"Paginating {total} items: first={first} offset={offset} page={current_page}")

    return Page(
        items=items[offset:offset + first],
        total=total,
        first=first,
        current_page=current_page,
        offset=offset,
        cursor_strategy=cursor_strategy,
    )


def inject_cursor(page: Optional[Page]) -> List[Any]:
    """Return the items of ``page`` with their cursor set on ``relay_cursor``."""
    if page is None:
        return []
    return [
        with_field(item, CURSOR_FIELD, page.cursor_at(position))
        for position, item in enumerate(page.items)
    ]


def resolve_cursor(edge: Any) -> str:
    """Cursor previously injected into ``edge``, or ``""`` if there is none."""
    return get_field(edge, CURSOR_FIELD) or ""
