from types import SimpleNamespace
from relay_bundle.core.config import Settings
from relay_bundle.api.graphql.relay import (
    ConnectionSpec,
    FieldSpec,
    Page,
    RelayType,
    TypeManager,
    build_schema,
    decode_global_id,
    encode_global_id,
)
from relay_bundle.api.graphql.relay.pagination import encode_cursor

AUTHOR_QUERY = """
query Author($id: ID!, $first: Int, $after: String) {
  node(id: $id) {
    id
    ... on Author {
      name
      shout
      books(first: $first, after: $after) {
        totalCount
        edges {
          cursor
          node { id title }
        }
        pageInfo {
          hasNextPage
          hasPreviousPage
          startCursor
          endCursor
          currentPage
          totalCount
        }
      }
    }
  }
}
"""

def test_author_first_page(schema):
    """Test a connection page resolved through the node field"""
    author_id = encode_global_id("author", 7)

    result = schema.execute_sync(AUTHOR_QUERY, variable_values={"id": author_id, "first": 2})

    assert result.errors is None
    author = result.data["node"]
    assert author["id"] == author_id
    assert author["name"] == "Ada"
    assert author["shout"] == "ADA"

    books = author["books"]
    assert books["totalCount"] == 5
    assert [edge["node"]["title"] for edge in books["edges"]] == ["Dune", "Emma"]
    assert [edge["cursor"] for edge in books["edges"]] == [encode_cursor(1), encode_cursor(2)]
    assert books["edges"][0]["node"]["id"] == encode_global_id("book", 1)

    page_info = books["pageInfo"]
    assert page_info["hasNextPage"] is True
    assert page_info["hasPreviousPage"] is False
    assert page_info["startCursor"] == encode_cursor(1)
    assert page_info["endCursor"] == encode_cursor(2)
    assert page_info["currentPage"] == 1
    assert page_info["totalCount"] == 5

def test_author_next_page(schema):
    """Test paging forward with the end cursor of the previous page"""
    author_id = encode_global_id("author", 7)

    result = schema.execute_sync(
        AUTHOR_QUERY,
        variable_values={"id": author_id, "first": 2, "after": encode_cursor(2)},
    )

    assert result.errors is None
    books = result.data["node"]["books"]
    assert [edge["node"]["title"] for edge in books["edges"]] == ["Ubik", "Solaris"]
    assert [edge["cursor"] for edge in books["edges"]] == [encode_cursor(2), encode_cursor(4)]
    assert books["pageInfo"]["currentPage"] == 2
    assert books["pageInfo"]["hasPreviousPage"] is True

def test_author_without_first(schema):
    """Test that a connection without `first` returns every item"""
    result = schema.execute_sync(AUTHOR_QUERY, variable_values={"id": encode_global_id("author", 7)})

    assert result.errors is None
    books = result.data["node"]["books"]
    assert len(books["edges"]) == 5
    assert books["pageInfo"]["hasNextPage"] is False
    assert books["pageInfo"]["currentPage"] == 1

def test_missing_relation_is_empty(schema):
    """Test that a source without the relation yields an empty connection"""
    result = schema.execute_sync(
        AUTHOR_QUERY,
        variable_values={"id": encode_global_id("author", 8), "first": 2},
    )

    assert result.errors is None
    books = result.data["node"]["books"]
    assert books["edges"] == []
    assert books["totalCount"] == 0
    assert books["pageInfo"]["endCursor"] is None

def test_offset_cursor_strategy():
    """Test connections built with absolute offset cursors"""
    manager = TypeManager(Settings(CURSOR_STRATEGY="offset"))
    manager.register(AuthorTypeForSettings())
    manager.register(BookTypeForSettings())
    schema = build_schema(manager)

    result = schema.execute_sync(
        AUTHOR_QUERY,
        variable_values={"id": encode_global_id("author", 7), "first": 2, "after": encode_cursor(2)},
    )

    assert result.errors is None
    edges = result.data["node"]["books"]["edges"]
    assert [edge["cursor"] for edge in edges] == [encode_cursor(3), encode_cursor(4)]

def test_node_not_found_resolves_to_null(schema):
    """Test the null policy of the in-memory types for unknown ids"""
    result = schema.execute_sync(AUTHOR_QUERY, variable_values={"id": encode_global_id("author", 999)})

    assert result.errors is None
    assert result.data["node"] is None

def test_node_with_malformed_id(schema):
    """Test that an undecodable id fails only the node field"""
    result = schema.execute_sync(AUTHOR_QUERY, variable_values={"id": "not-base64!!!"})

    assert result.data == {"node": None}
    assert len(result.errors) == 1
    assert "Malformed identifier" in result.errors[0].message

def test_node_with_unknown_type(schema):
    """Test that an id naming an unregistered type is reported as not found"""
    result = schema.execute_sync(AUTHOR_QUERY, variable_values={"id": encode_global_id("planet", 1)})

    assert result.data == {"node": None}
    assert "planet with id '1' not found" in result.errors[0].message

def test_invalid_first_is_a_field_error(schema):
    """Test that a negative `first` fails the connection field only"""
    result = schema.execute_sync(
        AUTHOR_QUERY,
        variable_values={"id": encode_global_id("author", 7), "first": -1},
    )

    assert result.data["node"]["name"] == "Ada"
    assert result.data["node"]["books"] is None
    assert "Invalid value -1 for 'first'" in result.errors[0].message

def test_nodes(schema):
    """Test fetching several objects of different types at once"""
    query = """
    query Nodes($ids: [ID!]!) {
      nodes(ids: $ids) {
        __typename
        id
        ... on Book { title }
        ... on Author { name }
      }
    }
    """
    ids = [encode_global_id("book", 3), encode_global_id("author", 8), encode_global_id("book", 42)]

    result = schema.execute_sync(query, variable_values={"ids": ids})

    assert result.errors is None
    assert result.data["nodes"] == [
        {"__typename": "Book", "id": ids[0], "title": "Ubik"},
        {"__typename": "Author", "id": ids[1], "name": "Grace"},
        None,
    ]

def test_schema_shape(schema):
    """Test the synthesized connection and edge types"""
    sdl = schema.as_str()

    assert "type Author implements Node" in sdl
    assert "type Book implements Node" in sdl
    assert "type BooksEdge" in sdl
    assert "type BooksConnection" in sdl
    assert "cursor: String!" in sdl
    assert "node: Book\n" in sdl
    assert "edges: [BooksEdge]\n" in sdl
    assert "pageInfo: PageInfo!" in sdl
    assert "node(id: ID!): Node" in sdl


class BookTypeForSettings(RelayType):
    name = "Book"

    def relay_fields(self):
        return {"title": FieldSpec(str)}

    def resolve_by_id(self, id, info=None):
        return None


class AuthorTypeForSettings(RelayType):
    name = "Author"

    def relay_fields(self):
        return {"name": FieldSpec(str), "shout": FieldSpec(str, resolve=lambda a, args, info: a["name"])}

    def connections(self):
        return {"books": ConnectionSpec(type="book")}

    def resolve_by_id(self, id, info=None):
        books = [{"id": number, "title": f"Volume {number}"} for number in range(1, 6)]
        return {"id": int(id), "name": "Ada", "books": books}


# Custom hooks declared on a relation

CALLS = []

def resolve_posts(source, args, info):
    CALLS.append(("resolve", dict(args)))
    return Page(items=source["posts"][:1], total=len(source["posts"]), first=1, current_page=1)

def inject_post_cursors(page, args, info):
    CALLS.append(("inject", dict(args)))
    return page.items

def resolve_post_cursor(post, args, info):
    return f"post-{post['id']}"


class PostType(RelayType):
    name = "Post"

    def relay_fields(self):
        return {"body": FieldSpec(str)}

    def resolve_by_id(self, id, info=None):
        return None


class BlogType(RelayType):
    name = "Blog"

    def relay_fields(self):
        return {}

    def connections(self):
        return {
            "posts": ConnectionSpec(
                type="post",
                resolve=resolve_posts,
                inject_cursor=inject_post_cursors,
                resolve_cursor=resolve_post_cursor,
            ),
        }

    def resolve_by_id(self, id, info=None):
        return {"id": id, "posts": [{"id": 1, "body": "hello"}, {"id": 2, "body": "again"}]}


def test_connection_hooks():
    """Test that custom resolve, inject and cursor hooks replace the defaults"""
    CALLS.clear()
    manager = TypeManager(Settings())
    manager.register(PostType())
    manager.register(BlogType())
    schema = build_schema(manager)
    query = """
    query Blog($id: ID!) {
      node(id: $id) {
        ... on Blog {
          posts(first: 1) {
            edges { cursor node { body } }
            totalCount
            pageInfo { startCursor endCursor }
          }
        }
      }
    }
    """

    result = schema.execute_sync(query, variable_values={"id": encode_global_id("blog", "main")})

    assert result.errors is None
    posts = result.data["node"]["posts"]
    assert posts["edges"] == [{"cursor": "post-1", "node": {"body": "hello"}}]
    assert posts["totalCount"] == 2
    assert posts["pageInfo"] == {"startCursor": "post-1", "endCursor": "post-1"}
    # Only arguments supplied by the client are passed on
    assert ("resolve", {"first": 1}) in CALLS
    assert ("inject", {}) in CALLS

def test_id_uses_lowercased_type_name(schema):
    """Test that node ids carry the type name with a lowercase first letter"""
    result = schema.execute_sync(AUTHOR_QUERY, variable_values={"id": encode_global_id("author", 7), "first": 1})

    type_name, raw_id = decode_global_id(result.data["node"]["id"])
    assert (type_name, raw_id) == ("author", "7")


def test_type_names_are_case_sensitive(schema):
    """Test that ids must use the registered (lowercased) type name"""
    result = schema.execute_sync(AUTHOR_QUERY, variable_values={"id": encode_global_id("Author", 7)})

    assert result.data == {"node": None}
    assert result.errors


# Types without a model class, told apart by the node field's type tag

class CatType(RelayType):
    name = "Cat"

    def relay_fields(self):
        return {"name": FieldSpec(str)}

    def resolve_by_id(self, id, info=None):
        return SimpleNamespace(id=int(id), name="Tom")


class DogType(RelayType):
    name = "Dog"

    def relay_fields(self):
        return {"name": FieldSpec(str)}

    def resolve_by_id(self, id, info=None):
        return SimpleNamespace(id=int(id), name="Rex")


def test_node_resolves_objects_of_types_without_model():
    """Test that plain objects come back as the type named in their id"""
    manager = TypeManager(Settings())
    manager.register(CatType())
    manager.register(DogType())
    schema = build_schema(manager)
    query = """
    query Pets($ids: [ID!]!) {
      nodes(ids: $ids) {
        __typename
        id
        ... on Dog { name }
      }
    }
    """
    ids = [encode_global_id("dog", 1), encode_global_id("cat", 2)]

    result = schema.execute_sync(query, variable_values={"ids": ids})

    assert result.errors is None
    assert result.data["nodes"] == [
        {"__typename": "Dog", "id": ids[0], "name": "Rex"},
        {"__typename": "Cat", "id": ids[1]},
    ]


# A type whose relation points back to itself

class CategoryType(RelayType):
    name = "Category"

    def relay_fields(self):
        return {"name": FieldSpec(str)}

    def connections(self):
        return {"children": ConnectionSpec(type="category")}

    def resolve_by_id(self, id, info=None):
        return {
            "id": id,
            "name": "Books",
            "children": [
                {"id": "fiction", "name": "Fiction", "children": [{"id": "crime", "name": "Crime"}]},
                {"id": "poetry", "name": "Poetry", "children": []},
            ],
        }


def test_self_referencing_connection():
    """Test that a relation back to the same type resolves nested pages"""
    manager = TypeManager(Settings())
    manager.register(CategoryType())
    schema = build_schema(manager)
    query = """
    query Category($id: ID!) {
      node(id: $id) {
        ... on Category {
          name
          children(first: 1) {
            totalCount
            edges {
              node {
                id
                name
                children { edges { node { name } } }
              }
            }
          }
        }
      }
    }
    """

    result = schema.execute_sync(query, variable_values={"id": encode_global_id("category", "books")})

    assert result.errors is None
    category = result.data["node"]
    assert category["name"] == "Books"
    assert category["children"]["totalCount"] == 2
    fiction = category["children"]["edges"][0]["node"]
    assert fiction["id"] == encode_global_id("category", "fiction")
    assert fiction["children"]["edges"] == [{"node": {"name": "Crime"}}]


# A custom resolve hook returning a pre-sliced, page-shaped mapping

def resolve_archived_posts(source, args, info):
    return {"items": source["posts"][1:], "total": 2, "first": 1, "currentPage": 2}


class ArchiveType(RelayType):
    name = "Archive"

    def relay_fields(self):
        return {}

    def connections(self):
        return {"entries": ConnectionSpec(type="post", resolve=resolve_archived_posts)}

    def resolve_by_id(self, id, info=None):
        return {"id": id, "posts": [{"id": 1, "body": "hello"}, {"id": 2, "body": "again"}]}


def test_resolve_hook_returning_mapping():
    """Test that a page-shaped mapping from a resolve hook backs edges and pageInfo"""
    manager = TypeManager(Settings())
    manager.register(PostType())
    manager.register(ArchiveType())
    schema = build_schema(manager)
    query = """
    query Archive($id: ID!) {
      node(id: $id) {
        ... on Archive {
          entries(first: 1) {
            totalCount
            edges { cursor node { body } }
            pageInfo { hasNextPage hasPreviousPage endCursor currentPage }
          }
        }
      }
    }
    """

    result = schema.execute_sync(query, variable_values={"id": encode_global_id("archive", "2024")})

    assert result.errors is None
    entries = result.data["node"]["entries"]
    assert entries["totalCount"] == 2
    assert entries["edges"] == [{"cursor": encode_cursor(2), "node": {"body": "again"}}]
    assert entries["pageInfo"] == {
        "hasNextPage": False,
        "hasPreviousPage": True,
        "endCursor": encode_cursor(2),
        "currentPage": 2,
    }
