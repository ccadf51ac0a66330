from relay_bundle.api.graphql.relay import TypeManager, build_schema
from relay_bundle.api.graphql.stores.types import StoreType
from relay_bundle.api.graphql.products.types import ProductType


def catalog_manager(settings=None) -> TypeManager:
    """Type manager with every catalog relay type registered."""
    manager = TypeManager(settings)
    manager.register(StoreType())
    manager.register(ProductType())
    return manager


# Create schema
manager = catalog_manager()
schema = build_schema(manager)
