from typing import Optional
import strawberry
from strawberry.scalars import ID

# Shared types every relay schema is built on. Connection types return their
# Page as the pageInfo value, so the PageInfo resolvers read it off `self`.

@strawberry.interface(description="An object with a globally unique ID.")
class Node:
    id: ID

@strawberry.type(description="Information about pagination in a connection.")
class PageInfo:
    @strawberry.field
    def has_next_page(self) -> bool:
        return self.has_next_page

    @strawberry.field
    def has_previous_page(self) -> bool:
        return self.has_previous_page

    @strawberry.field
    def start_cursor(self) -> Optional[str]:
        return self.start_cursor

    @strawberry.field
    def end_cursor(self) -> Optional[str]:
        return self.end_cursor

    @strawberry.field
    def current_page(self) -> int:
        return self.current_page

    @strawberry.field
    def total_count(self) -> int:
        return self.total
