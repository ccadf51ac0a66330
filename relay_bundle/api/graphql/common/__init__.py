# Common module for shared Strawberry elements across features
from relay_bundle.api.graphql.common.types import Node, PageInfo

__all__ = ['Node', 'PageInfo']
