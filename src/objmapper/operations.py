import typing

from .context import Context
from .defaults import DefaultPropertyAccessorImpl
from .interfaces import (
    ContextAware,
    MapperAware,
    MapperInterface,
    MappingOperation,
    PropertyAccessor,
)
from .types import TypeId
from .utils import assert_not_none

_default_property_accessor = DefaultPropertyAccessorImpl()


class DefaultMappingOperation(MappingOperation):
    """
    Copies the source property of the same name as the destination property,
    provided the source has one.

    Subclasses change where the value comes from by overriding
    :py:meth:`can_map_property` and :py:meth:`get_source_value`.
    """

    options: typing.Optional["Options"] = None

    @property
    def property_accessor(self) -> PropertyAccessor:
        if self.options is None:
            return _default_property_accessor
        return self.options.property_accessor

    def set_options(self, options: "Options") -> None:
        self.options = options

    def can_map_property(self, property_name: str, source: typing.Any) -> bool:
        return self.property_accessor.has_property(source, property_name)

    def get_source_value(self, source: typing.Any, property_name: str) -> typing.Any:
        return self.property_accessor.get_property(source, property_name)

    def set_destination_value(
        self, destination: typing.Any, property_name: str, value: typing.Any
    ) -> None:
        self.property_accessor.set_property(destination, property_name, value)

    def map_property(self, property_name: str, source: typing.Any, destination: typing.Any) -> None:
        if not self.can_map_property(property_name, source):
            return
        value = self.get_source_value(source, property_name)
        if value is None and self.options is not None and self.options.skip_none:
            return
        self.set_destination_value(destination, property_name, value)


class MapFrom(DefaultMappingOperation):
    """
    Populates the property with whatever the callback computes from the whole source.

    .. code-block:: python

       mapping.for_member("display_name", MapFrom(lambda src: src["name"].upper()))
    """

    value_callback: typing.Callable[[typing.Any], typing.Any]

    def can_map_property(self, property_name: str, source: typing.Any) -> bool:
        return True

    def get_source_value(self, source: typing.Any, property_name: str) -> typing.Any:
        return self.value_callback(source)

    def __init__(self, value_callback: typing.Callable[[typing.Any], typing.Any]):
        self.value_callback = value_callback


class FromProperty(DefaultMappingOperation):
    """
    Copies a source property that goes by another name.
    """

    source_property_name: str

    def can_map_property(self, property_name: str, source: typing.Any) -> bool:
        return self.property_accessor.has_property(source, self.source_property_name)

    def get_source_value(self, source: typing.Any, property_name: str) -> typing.Any:
        return self.property_accessor.get_property(source, self.source_property_name)

    def __init__(self, source_property_name: str):
        self.source_property_name = source_property_name


class SetTo(DefaultMappingOperation):
    value: typing.Any

    def can_map_property(self, property_name: str, source: typing.Any) -> bool:
        return True

    def get_source_value(self, source: typing.Any, property_name: str) -> typing.Any:
        return self.value

    def __init__(self, value: typing.Any):
        self.value = value


class Ignore(MappingOperation):
    def map_property(self, property_name: str, source: typing.Any, destination: typing.Any) -> None:
        pass


class MapTo(DefaultMappingOperation, MapperAware, ContextAware):
    """
    Maps a nested source value (or, with ``sequence`` set, each item of a nested
    collection) to ``destination_type`` through the mapper, within the current context.

    :param destination_type: The destination type identifier for the nested value(s).
    :param bool sequence: Set to :py:const:`True` if the source property holds a collection.
    :param str property_name: The source property to read, if named differently.
    """

    destination_type: typing.Union[TypeId, str]
    sequence: bool
    source_property_name: typing.Optional[str]
    mapper: typing.Optional[MapperInterface] = None
    context: typing.Optional[Context] = None

    def set_mapper(self, mapper: MapperInterface) -> None:
        self.mapper = mapper

    def set_context(self, context: Context) -> None:
        self.context = context

    def can_map_property(self, property_name: str, source: typing.Any) -> bool:
        return self.property_accessor.has_property(
            source, self.source_property_name or property_name
        )

    def get_source_value(self, source: typing.Any, property_name: str) -> typing.Any:
        value = self.property_accessor.get_property(
            source, self.source_property_name or property_name
        )
        if value is None:
            return None
        mapper = assert_not_none(self.mapper)
        if self.sequence:
            return [mapper.map(item, self.destination_type, self.context) for item in value]
        return mapper.map(value, self.destination_type, self.context)

    def __init__(
        self,
        destination_type: typing.Union[TypeId, str],
        sequence: bool = False,
        property_name: typing.Optional[str] = None,
    ):
        self.destination_type = destination_type
        self.sequence = sequence
        self.source_property_name = property_name


if typing.TYPE_CHECKING:
    from .configuration import Options  # noqa: E402
