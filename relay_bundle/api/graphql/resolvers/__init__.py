from relay_bundle.api.graphql.resolvers.base import BaseResolver

__all__ = ['BaseResolver']
