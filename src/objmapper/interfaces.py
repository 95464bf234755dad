"""
This module contains the interface definitions the mapper is built upon.
The mapper itself only consumes :py:class:`MappingRegistry` and :py:class:`Mapping`;
:py:mod:`objmapper.configuration` provides the stock implementations.

"""
import abc
import typing

from .context import Context
from .types import TypeId


class PropertyAccessor(metaclass=abc.ABCMeta):
    """
    A :py:class:`PropertyAccessor` abstracts away how properties of both objects and
    records are enumerated, read and written.
    """

    @abc.abstractmethod
    def has_property(self, target: typing.Any, name: str) -> bool:
        ...  # pragma: nocover

    @abc.abstractmethod
    def get_property(self, target: typing.Any, name: str) -> typing.Any:
        ...  # pragma: nocover

    @abc.abstractmethod
    def set_property(self, target: typing.Any, name: str, value: typing.Any) -> None:
        ...  # pragma: nocover

    @abc.abstractmethod
    def get_property_names(self, target: typing.Any) -> typing.Sequence[str]:
        """
        Returns the names of the properties ``target`` exposes, in a stable order.

        :param Any target: An object or a record.
        :return: The sequence of property names.
        """
        ...  # pragma: nocover


class TypeResolver(metaclass=abc.ABCMeta):
    """
    A :py:class:`TypeResolver` derives the type identifiers a mapping is looked up by.
    """

    @abc.abstractmethod
    def resolve_source_type(self, value: typing.Any) -> TypeId:
        """
        Returns the type identifier of a source value.

        :param Any value: The source value.
        :return: Its concrete class, or :py:attr:`DataType.ARRAY` for a record.
        :raises UnsupportedSourceTypeError: if the value is a primitive.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def resolve_destination_type(self, target: typing.Any, allow_abstract: bool = False) -> TypeId:
        """
        Returns the type identifier for a target specification, which may be a class,
        a type tag, a type name, or an existing instance.

        :param Any target: The target specification.
        :param bool allow_abstract: Accept abstract classes; the caller takes responsibility for
                                    rejecting them if no custom constructor turns up.
        :return: The type identifier.
        :raises InvalidMappingTargetError: if ``target`` is an abstract class and ``allow_abstract`` is not set.
        :raises UnsupportedTargetTypeError: if ``target`` cannot be classified.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def is_abstract(self, type_id: TypeId) -> bool:
        ...  # pragma: nocover

    @abc.abstractmethod
    def instantiate(self, type_id: TypeId, target: typing.Any = None) -> typing.Any:
        """
        Constructs a default instance of the type identified by ``type_id``.

        :param TypeId type_id: The resolved destination type identifier.
        :param Any target: The target ``type_id`` was resolved from, if any.  A concrete
                           mutable mapping class given here is instantiated as is
                           rather than as a plain :py:class:`dict`.
        """
        ...  # pragma: nocover


class MapperInterface(metaclass=abc.ABCMeta):
    """
    A :py:class:`MapperInterface` maps a whole source value onto a destination.
    It is implemented by :py:class:`objmapper.mapper.AutoMapper` as well as by
    custom mappers that take over the mapping of a specific type pair.
    """

    @abc.abstractmethod
    def map(
        self,
        source: typing.Any,
        target: typing.Any,
        context: typing.Optional[Context] = None,
    ) -> typing.Any:
        """
        Maps ``source`` to a new destination described by ``target``.

        :param Any source: The source value.
        :param Any target: The destination type identifier (or anything that resolves to one).
        :param Context context: The mapping context.
        :return: The populated destination.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def map_to_object(
        self,
        source: typing.Any,
        destination: typing.Any,
        context: typing.Optional[Context] = None,
    ) -> typing.Any:
        """
        Maps ``source`` into the existing ``destination``.

        :param Any source: The source value.
        :param Any destination: The object or record to populate.
        :param Context context: The mapping context.
        :return: The populated destination.
        """
        ...  # pragma: nocover


class MapperAware(metaclass=abc.ABCMeta):
    """
    Implemented by mapping operations and custom mappers that need the mapper
    in order to map nested values.
    """

    @abc.abstractmethod
    def set_mapper(self, mapper: "MapperInterface") -> None:
        ...  # pragma: nocover


class ContextAware(metaclass=abc.ABCMeta):
    """
    Implemented by mapping operations that need to look at the mapping context.
    The context is handed over as is; operations are expected not to modify it.
    """

    @abc.abstractmethod
    def set_context(self, context: Context) -> None:
        ...  # pragma: nocover


class MappingOperation(metaclass=abc.ABCMeta):
    """
    A :py:class:`MappingOperation` governs how a single destination property is populated.
    """

    @abc.abstractmethod
    def map_property(self, property_name: str, source: typing.Any, destination: typing.Any) -> None:
        """
        Computes the value for ``property_name`` from ``source`` and stores it into ``destination``.

        :param str property_name: The name of the destination property.
        :param Any source: The source value.
        :param Any destination: The destination being populated.
        """
        ...  # pragma: nocover


CustomConstructor = typing.Callable[[typing.Any, MapperInterface, Context], typing.Any]


class Mapping(metaclass=abc.ABCMeta):
    """
    A :py:class:`Mapping` is the set of rules for converting values of one type to another.
    """

    @property
    @abc.abstractmethod
    def source_type(self) -> TypeId:
        ...  # pragma: nocover

    @property
    @abc.abstractmethod
    def destination_type(self) -> TypeId:
        ...  # pragma: nocover

    @abc.abstractmethod
    def provides_custom_mapper(self) -> bool:
        ...  # pragma: nocover

    @abc.abstractmethod
    def get_custom_mapper(self) -> MapperInterface:
        ...  # pragma: nocover

    @abc.abstractmethod
    def has_custom_constructor(self) -> bool:
        ...  # pragma: nocover

    @abc.abstractmethod
    def get_custom_constructor(self) -> CustomConstructor:
        ...  # pragma: nocover

    @abc.abstractmethod
    def get_target_properties(
        self, destination: typing.Any, source: typing.Any
    ) -> typing.Sequence[str]:
        """
        Returns the names of the destination properties to populate, in the order
        they are to be populated.

        :param Any destination: The destination being populated.
        :param Any source: The source value.
        :return: The sequence of property names.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def get_mapping_operation_for(self, property_name: str) -> MappingOperation:
        ...  # pragma: nocover


class MappingRegistry(metaclass=abc.ABCMeta):
    """
    A :py:class:`MappingRegistry` holds the mappings known to a mapper.
    It must not be modified while mapping is in progress.
    """

    @abc.abstractmethod
    def get_mapping_for(
        self, source_type: TypeId, destination_type: TypeId
    ) -> typing.Optional[Mapping]:
        """
        Returns the mapping for the type pair, or :py:const:`None` if none is registered.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def find_destination_type(self, name: str) -> typing.Optional[TypeId]:
        """
        Returns the registered destination type whose (qualified) name is ``name``.

        :raises UnsupportedTargetTypeError: if ``name`` does not single out one type.
        """
        ...  # pragma: nocover
