import pytest
from relay_bundle.core.config import Settings
from relay_bundle.api.graphql.relay import ConnectionSpec, FieldSpec, RelayType, TypeManager, build_schema

# In-memory library used by the schema tests
BOOKS = {
    "1": {"id": 1, "title": "Dune"},
    "2": {"id": 2, "title": "Emma"},
    "3": {"id": 3, "title": "Ubik"},
    "4": {"id": 4, "title": "Solaris"},
    "5": {"id": 5, "title": "Neuromancer"},
}

AUTHORS = {
    "7": {"id": 7, "name": "Ada", "books": [BOOKS[key] for key in ("1", "2", "3", "4", "5")]},
    "8": {"id": 8, "name": "Grace"},
}


class BookType(RelayType):
    name = "Book"

    def relay_fields(self):
        return {"title": FieldSpec(str, "Title of the book.")}

    def resolve_by_id(self, id, info=None):
        # Missing books resolve to null
        return BOOKS.get(id)


class AuthorType(RelayType):
    name = "Author"

    def relay_fields(self):
        return {
            "name": FieldSpec(str),
            "shout": FieldSpec(str, resolve=lambda author, args, info: author["name"].upper()),
        }

    def connections(self):
        return {"books": ConnectionSpec(type="book")}

    def resolve_by_id(self, id, info=None):
        return AUTHORS.get(id)


@pytest.fixture
def settings():
    return Settings()

@pytest.fixture
def manager(settings):
    manager = TypeManager(settings)
    manager.register(AuthorType())
    manager.register(BookType())
    return manager

@pytest.fixture
def schema(manager):
    return build_schema(manager)
