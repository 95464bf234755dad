import collections.abc
import dataclasses
import inspect
import typing

from .exceptions import (
    InvalidMappingTargetError,
    UnsupportedSourceTypeError,
    UnsupportedTargetTypeError,
)
from .interfaces import PropertyAccessor, TypeResolver
from .types import DataType, TypeId, is_abstract_type, is_primitive, is_record

TypeLookup = typing.Callable[[str], typing.Optional[TypeId]]


class DefaultTypeResolverImpl(TypeResolver):
    type_lookup: typing.Optional[TypeLookup]

    def resolve_source_type(self, value: typing.Any) -> TypeId:
        if is_record(value):
            return DataType.ARRAY
        elif is_primitive(value):
            raise UnsupportedSourceTypeError(type(value))
        return type(value)

    def resolve_destination_type(self, target: typing.Any, allow_abstract: bool = False) -> TypeId:
        if isinstance(target, DataType):
            return target
        elif isinstance(target, str):
            return self._resolve_type_name(target, allow_abstract)
        elif isinstance(target, type):
            return self._check_class(target, allow_abstract)
        elif is_record(target):
            return DataType.ARRAY
        elif is_primitive(target):
            raise UnsupportedTargetTypeError(target)
        return type(target)

    def _resolve_type_name(self, name: str, allow_abstract: bool) -> TypeId:
        try:
            return DataType(name)
        except ValueError:
            pass
        type_id = self.type_lookup(name) if self.type_lookup is not None else None
        if type_id is None:
            raise UnsupportedTargetTypeError(name, f"no destination type known as {name!r}")
        return self._check_class(type_id, allow_abstract) if isinstance(type_id, type) else type_id

    def _check_class(self, class_: type, allow_abstract: bool) -> TypeId:
        if issubclass(class_, collections.abc.Mapping):
            return DataType.ARRAY
        if not allow_abstract and self.is_abstract(class_):
            raise InvalidMappingTargetError(
                class_,
                "mapping to an abstract type requires a custom constructor; "
                "use map_to_object to populate an existing instance instead",
            )
        return class_

    def is_abstract(self, type_id: TypeId) -> bool:
        return is_abstract_type(type_id)

    def instantiate(self, type_id: TypeId, target: typing.Any = None) -> typing.Any:
        if type_id is DataType.ARRAY:
            if (
                isinstance(target, type)
                and issubclass(target, collections.abc.MutableMapping)
                and not self.is_abstract(target)
            ):
                return target()
            return {}
        assert isinstance(type_id, type)
        return type_id()

    def __init__(self, type_lookup: typing.Optional[TypeLookup] = None):
        self.type_lookup = type_lookup


class DefaultPropertyAccessorImpl(PropertyAccessor):
    """
    Accesses records by item and everything else by attribute.
    """

    def has_property(self, target: typing.Any, name: str) -> bool:
        if is_record(target):
            return name in target
        return hasattr(target, name)

    def get_property(self, target: typing.Any, name: str) -> typing.Any:
        if is_record(target):
            return target[name]
        return getattr(target, name)

    def set_property(self, target: typing.Any, name: str, value: typing.Any) -> None:
        if isinstance(target, collections.abc.MutableMapping):
            target[name] = value
        else:
            setattr(target, name, value)

    def get_property_names(self, target: typing.Any) -> typing.Sequence[str]:
        if is_record(target):
            return [str(k) for k in target.keys()]
        elif dataclasses.is_dataclass(target):
            return [f.name for f in dataclasses.fields(target)]

        names: typing.List[str] = []
        for class_ in reversed(type(target).__mro__):
            for name, annotation in inspect.get_annotations(class_).items():
                if typing.ClassVar in (annotation, typing.get_origin(annotation)):
                    continue
                if not name.startswith("_") and name not in names:
                    names.append(name)
        for name in getattr(target, "__dict__", {}):
            if not name.startswith("_") and name not in names:
                names.append(name)
        return names
