from typing import Any, Callable, Dict, List, Optional, Tuple, get_args, get_origin
import strawberry

# Helpers to declare Strawberry object types at runtime, for types whose
# fields are only known once a RelayType has been registered.

FieldDefinition = Tuple[Any, Any]  # (annotation, strawberry field)


def ucfirst(value: str) -> str:
    return value[:1].upper() + value[1:]


def lcfirst(value: str) -> str:
    return value[:1].lower() + value[1:]


def unwrap_list(type_: Any) -> Any:
    """Return the element type of a ``List[T]`` annotation, else ``type_``."""
    if get_origin(type_) in (list, List):
        return get_args(type_)[0]
    return type_


def declare_object_type(name: str, bases: Tuple[type, ...] = ()) -> type:
    """Create the bare class of a type so other types can refer to it before it is defined."""
    return type(name, bases, {"__module__": __name__, "__annotations__": {}})


def define_object_type(
    cls: type,
    fields: Dict[str, FieldDefinition],
    *,
    description: Optional[str] = None,
    is_type_of: Optional[Callable[[Any], bool]] = None,
) -> type:
    """Attach ``fields`` to a declared class and decorate it as a Strawberry type."""
    annotations = cls.__annotations__
    for field_name, (annotation, strawberry_field) in fields.items():
        annotations[field_name] = annotation
        setattr(cls, field_name, strawberry_field)

    if is_type_of is not None:
        def _is_type_of(cls, obj, info) -> bool:
            return is_type_of(obj)
        cls.is_type_of = classmethod(_is_type_of)

    # Decorating keeps the class identity, so earlier references stay valid
    return strawberry.type(cls, name=cls.__name__, description=description)


def build_object_type(
    name: str,
    fields: Dict[str, FieldDefinition],
    *,
    bases: Tuple[type, ...] = (),
    description: Optional[str] = None,
    is_type_of: Optional[Callable[[Any], bool]] = None,
) -> type:
    """Create and decorate a Strawberry type called ``name``."""
    return define_object_type(
        declare_object_type(name, bases),
        fields,
        description=description,
        is_type_of=is_type_of,
    )
