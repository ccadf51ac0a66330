from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import strawberry
from strawberry.scalars import ID
from strawberry.types import Info

from relay_bundle.api.graphql.relay.connection import ConnectionSpec, Resolver, build_connections
from relay_bundle.api.graphql.relay.global_id import encode_global_id
from relay_bundle.api.graphql.relay.items import get_field
from relay_bundle.api.graphql.relay.objects import (
    FieldDefinition,
    declare_object_type,
    define_object_type,
    lcfirst,
)


@dataclass(frozen=True)
class FieldSpec:
    """A plain field of a relay type; without ``resolve`` it reads ``source[name]``."""
    type: Any
    description: Optional[str] = None
    resolve: Optional[Resolver] = None


class RelayType(ABC):
    """An object type addressable through a global id.

    Subclasses describe the type through hooks; ``build_relay_type`` turns
    them into a Strawberry type implementing ``Node``.
    """

    name: str = ""
    description: Optional[str] = None
    # Class of the source objects, used to tell types apart behind Node
    model: Optional[type] = None

    @property
    def global_type_name(self) -> str:
        return lcfirst(self.name)

    @abstractmethod
    def relay_fields(self) -> Dict[str, FieldSpec]:
        """Fields of the type, besides ``id`` and the connections."""

    @abstractmethod
    def resolve_by_id(self, id: str, info: Optional[Info] = None) -> Any:
        """Fetch the object with raw id ``id``; may be a coroutine function."""

    def connections(self) -> Dict[str, ConnectionSpec]:
        return {}

    def get_identifier(self, obj: Any) -> Any:
        return get_field(obj, "id")

    def interfaces(self, manager) -> List[type]:
        return [manager.type("node")]

    def is_type_of(self, obj: Any) -> bool:
        if self.model is not None and isinstance(obj, self.model):
            return True
        type_name = get_field(obj, "__typename")
        if type_name is not None:
            return type_name == self.name
        if isinstance(obj, Mapping):
            return True
        return self.model is None


def relay_field(name: str, spec: FieldSpec, manager) -> FieldDefinition:
    field_type = manager.type(spec.type) if isinstance(spec.type, str) else spec.type

    def resolve(root, info: Info):
        if spec.resolve is not None:
            return spec.resolve(root, {}, info)
        return get_field(root, name)

    return field_type, strawberry.field(resolver=resolve, description=spec.description)


def id_field(relay_type: RelayType) -> FieldDefinition:
    def resolve_id(root):
        return encode_global_id(relay_type.global_type_name, relay_type.get_identifier(root))

    return ID, strawberry.field(resolver=resolve_id, description="ID of type.")


def build_relay_type(relay_type: RelayType, manager, cls: Optional[type] = None) -> type:
    """Assemble the Strawberry type for ``relay_type``.

    Fields are merged in order: relay fields, connections, then ``id``, so a
    later definition wins over an earlier one of the same name. ``cls`` is a
    class already handed out by the manager, which then becomes the type.
    """
    if cls is None:
        cls = declare_object_type(relay_type.name, tuple(relay_type.interfaces(manager)))

    fields: Dict[str, FieldDefinition] = {}
    for name, spec in relay_type.relay_fields().items():
        fields[name] = relay_field(name, spec, manager)
    fields.update(build_connections(relay_type, manager))
    fields["id"] = id_field(relay_type)

    return define_object_type(
        cls,
        fields,
        description=relay_type.description,
        is_type_of=relay_type.is_type_of,
    )
