import dataclasses
import logging
import typing
from collections import OrderedDict

from .declarative import apply_meta, handle_meta
from .defaults import DefaultPropertyAccessorImpl
from .exceptions import InvalidDeclarationError, UnsupportedTargetTypeError
from .interfaces import (
    CustomConstructor,
    MapperInterface,
    Mapping,
    MappingOperation,
    MappingRegistry,
    PropertyAccessor,
)
from .operations import DefaultMappingOperation, Ignore, MapFrom
from .types import DataType, TypeId, is_record, normalize_type_id
from .utils import assert_not_none, english_enumerate, type_name

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Options:
    property_accessor: PropertyAccessor = dataclasses.field(
        default_factory=DefaultPropertyAccessorImpl
    )
    """
    Enumerates, reads and writes properties of sources and destinations.
    """

    default_operation_factory: typing.Callable[[], MappingOperation] = DefaultMappingOperation
    """
    Builds the operation for the properties no operation is registered for.
    """

    skip_none: bool = False
    """
    Leaves a destination property untouched when the source value is :py:const:`None`.
    """

    use_substitution: bool = True
    """
    Falls back to the mapping registered for the nearest base class of the source
    when the source's own class has none.
    """


class MappingImpl(Mapping):
    _source_type: TypeId
    _destination_type: TypeId
    options: Options
    _operations: typing.MutableMapping[str, MappingOperation]
    _default_operation: MappingOperation
    _custom_constructor: typing.Optional[CustomConstructor] = None
    _custom_mapper: typing.Optional[MapperInterface] = None

    @property
    def source_type(self) -> TypeId:
        return self._source_type

    @property
    def destination_type(self) -> TypeId:
        return self._destination_type

    def provides_custom_mapper(self) -> bool:
        return self._custom_mapper is not None

    def get_custom_mapper(self) -> MapperInterface:
        return assert_not_none(self._custom_mapper)

    def has_custom_constructor(self) -> bool:
        return self._custom_constructor is not None

    def get_custom_constructor(self) -> CustomConstructor:
        return assert_not_none(self._custom_constructor)

    def get_target_properties(
        self, destination: typing.Any, source: typing.Any
    ) -> typing.Sequence[str]:
        accessor = self.options.property_accessor
        # a record has no shape of its own; it takes over the source's
        names = list(accessor.get_property_names(source if is_record(destination) else destination))
        for name in self._operations:
            if name not in names:
                names.append(name)
        return names

    def get_mapping_operation_for(self, property_name: str) -> MappingOperation:
        return self._operations.get(property_name, self._default_operation)

    def _configure(self, operation: MappingOperation) -> MappingOperation:
        if isinstance(operation, DefaultMappingOperation):
            operation.set_options(self.options)
        return operation

    def for_member(
        self,
        property_name: str,
        operation: typing.Union[MappingOperation, typing.Callable[[typing.Any], typing.Any]],
    ) -> "MappingImpl":
        """
        Assigns the operation that populates ``property_name``.
        A plain callable is taken as the callback of a :py:class:`MapFrom`.

        :param str property_name: The destination property name.
        :param operation: A :py:class:`MappingOperation`, or a callable receiving the source.
        :return: The mapping itself.
        """
        if not isinstance(operation, MappingOperation):
            if not callable(operation):
                raise InvalidDeclarationError(
                    f"member {property_name!r} of {self!r} must be given an operation or a callable"
                )
            operation = MapFrom(operation)
        self._operations[property_name] = self._configure(operation)
        return self

    def ignore_member(self, property_name: str) -> "MappingImpl":
        self._operations[property_name] = Ignore()
        return self

    def construct_using(self, constructor: CustomConstructor) -> "MappingImpl":
        """
        Makes the mapper build destinations with ``constructor``, which is called
        with the source, the mapper, and the mapping context.
        """
        self._custom_constructor = constructor
        return self

    def use_custom_mapper(self, mapper: MapperInterface) -> "MappingImpl":
        """
        Hands the mapping of the whole type pair over to ``mapper``.
        """
        self._custom_mapper = mapper
        return self

    def with_options(self, **kwargs: typing.Any) -> "MappingImpl":
        """
        Overrides the options inherited from the configuration for this mapping alone.
        """
        self.options = dataclasses.replace(self.options, **kwargs)
        self._default_operation = self._configure(self.options.default_operation_factory())
        for operation in self._operations.values():
            self._configure(operation)
        return self

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({type_name(self._source_type)} -> "
            f"{type_name(self._destination_type)})"
        )

    def __init__(self, source_type: TypeId, destination_type: TypeId, options: Options):
        self._source_type = source_type
        self._destination_type = destination_type
        self.options = options
        self._operations = OrderedDict()
        self._default_operation = self._configure(options.default_operation_factory())


class Configuration(MappingRegistry):
    """
    The stock :py:class:`MappingRegistry`.  Mappings are registered once, up front,
    and looked up by the mapper afterwards.

    :param Options options: The options every mapping registered from now on inherits.
    """

    options: Options
    _mappings: typing.Dict[typing.Tuple[TypeId, TypeId], MappingImpl]

    def _normalize(self, type_id: typing.Union[TypeId, str]) -> TypeId:
        if not isinstance(type_id, (type, str)):
            raise InvalidDeclarationError(f"{type_id!r} is neither a class nor a type tag")
        try:
            return normalize_type_id(type_id)
        except ValueError:
            raise InvalidDeclarationError(
                f"unknown type tag {type_id!r}; expected one of "
                f"{english_enumerate((repr(t.value) for t in DataType), conj='or')}"
            )

    def register_mapping(
        self,
        source_type: typing.Union[TypeId, str],
        destination_type: typing.Union[TypeId, str],
        meta: typing.Optional[typing.Type] = None,
    ) -> MappingImpl:
        """
        Registers a new mapping for the type pair and returns it for further configuration.

        :param source_type: The source class, or :py:attr:`DataType.ARRAY` (``dict`` and ``"array"`` are accepted too).
        :param destination_type: The destination class or type tag.
        :param type meta: An optional declarative description; see :py:mod:`objmapper.declarative`.
        :return: The new :py:class:`MappingImpl`.
        """
        key = (self._normalize(source_type), self._normalize(destination_type))
        if key in self._mappings:
            logger.warning(
                "replacing the mapping registered for %s -> %s",
                type_name(key[0]),
                type_name(key[1]),
            )
        mapping = MappingImpl(key[0], key[1], dataclasses.replace(self.options))
        if meta is not None:
            apply_meta(mapping, handle_meta(meta))
        self._mappings[key] = mapping
        logger.debug("registered %r", mapping)
        return mapping

    def has_mapping_for(
        self,
        source_type: typing.Union[TypeId, str],
        destination_type: typing.Union[TypeId, str],
    ) -> bool:
        return (
            self.get_mapping_for(self._normalize(source_type), self._normalize(destination_type))
            is not None
        )

    def get_mapping_for(
        self, source_type: TypeId, destination_type: TypeId
    ) -> typing.Optional[Mapping]:
        mapping = self._mappings.get((source_type, destination_type))
        if mapping is not None:
            return mapping
        if not self.options.use_substitution or not isinstance(source_type, type):
            return None
        for base in source_type.__mro__[1:]:
            mapping = self._mappings.get((base, destination_type))
            if mapping is not None:
                logger.debug(
                    "substituting %r for %s -> %s",
                    mapping,
                    type_name(source_type),
                    type_name(destination_type),
                )
                return mapping
        return None

    def find_destination_type(self, name: str) -> typing.Optional[TypeId]:
        """
        Looks a registered destination class up by its ``module.qualname`` or by its
        bare qualified name.

        :raises UnsupportedTargetTypeError: if the bare name fits more than one class.
        """
        candidates: typing.List[type] = []
        for _, destination_type in self._mappings:
            if not isinstance(destination_type, type):
                continue
            if type_name(destination_type) == name:
                return destination_type
            if destination_type.__qualname__ == name and destination_type not in candidates:
                candidates.append(destination_type)
        if len(candidates) > 1:
            raise UnsupportedTargetTypeError(
                name,
                "ambiguous type name; use one of "
                + english_enumerate((type_name(c) for c in candidates), conj="or"),
            )
        return candidates[0] if candidates else None

    def __init__(self, options: typing.Optional[Options] = None):
        self.options = options if options is not None else Options()
        self._mappings = {}
