import collections.abc
import copy
import logging
import typing

from .configuration import Configuration
from .context import (
    DESTINATION_CONTEXT,
    DESTINATION_STACK_CONTEXT,
    DESTINATION_TYPE_CONTEXT,
    PROPERTY_STACK_CONTEXT,
    SOURCE_STACK_CONTEXT,
    Context,
    assigned,
    pushed,
)
from .defaults import DefaultTypeResolverImpl
from .exceptions import (
    InvalidArgumentError,
    InvalidMappingTargetError,
    UnregisteredMappingError,
)
from .interfaces import (
    ContextAware,
    MapperAware,
    MapperInterface,
    Mapping,
    MappingRegistry,
    TypeResolver,
)
from .types import TypeId
from .utils import type_name

logger = logging.getLogger(__name__)


class CustomMapper(MapperInterface):
    """
    Base class for mappers that take over the mapping of a whole type pair
    (see :py:meth:`objmapper.configuration.MappingImpl.use_custom_mapper`).

    Subclasses implement :py:meth:`map_to_object`; :py:meth:`map` builds a default
    instance of the destination type and populates it through :py:meth:`map_to_object`.
    """

    type_resolver: TypeResolver = DefaultTypeResolverImpl()

    def map(
        self,
        source: typing.Any,
        target: typing.Any,
        context: typing.Optional[Context] = None,
    ) -> typing.Any:
        destination = self.type_resolver.instantiate(
            self.type_resolver.resolve_destination_type(target), target
        )
        return self.map_to_object(source, destination, context)


class AutoMapper(MapperInterface):
    """
    The mapper.  It looks up the :py:class:`Mapping` registered for the type pair at hand
    and populates the destination property by property.

    A single :py:class:`AutoMapper` may serve any number of callers at once as long as
    each call gets a context of its own; the registry must not be altered meanwhile.

    :param MappingRegistry registry: The registry to look mappings up in.
    :param TypeResolver type_resolver: The type resolver; defaults to one that resolves type names through ``registry``.
    """

    registry: MappingRegistry
    type_resolver: TypeResolver

    @classmethod
    def initialize(
        cls, configurator: typing.Callable[[Configuration], typing.Any]
    ) -> "AutoMapper":
        """
        Creates a mapper along with a new :py:class:`Configuration`, which ``configurator``
        gets to register mappings on first.
        """
        configuration = Configuration()
        configurator(configuration)
        return cls(configuration)

    @property
    def configuration(self) -> MappingRegistry:
        return self.registry

    def get_mapping(self, source_type: TypeId, destination_type: TypeId) -> Mapping:
        mapping = self.registry.get_mapping_for(source_type, destination_type)
        if mapping is None:
            raise UnregisteredMappingError(source_type, destination_type)
        return mapping

    def _get_custom_mapper(self, mapping: Mapping) -> MapperInterface:
        custom_mapper = mapping.get_custom_mapper()
        if isinstance(custom_mapper, MapperAware):
            custom_mapper = copy.copy(custom_mapper)
            custom_mapper.set_mapper(self)
        return custom_mapper

    def _build_destination(
        self,
        mapping: Mapping,
        source: typing.Any,
        destination_type: TypeId,
        target: typing.Any,
        context: Context,
    ) -> typing.Any:
        if mapping.has_custom_constructor():
            return mapping.get_custom_constructor()(source, self, context)
        elif self.type_resolver.is_abstract(destination_type):
            raise InvalidMappingTargetError(
                destination_type,
                "mapping to an abstract type requires a custom constructor; "
                "use map_to_object to populate an existing instance instead",
            )
        return self.type_resolver.instantiate(destination_type, target)

    def map(
        self,
        source: typing.Any,
        target: typing.Any,
        context: typing.Optional[Context] = None,
    ) -> typing.Any:
        """
        Maps ``source`` to a new destination.

        :param Any source: An object or a record.  :py:const:`None` maps to :py:const:`None`.
        :param Any target: A class, a type tag, a registered type name, or an instance
                           whose type is taken as the destination type.
                           A concrete mutable mapping class, such as
                           :py:class:`collections.OrderedDict`, is mapped as a record and
                           built as an instance of that class.
        :param Context context: An optional context shared with nested mapping calls.
        :return: The populated destination.
        """
        if source is None:
            return None
        if context is None:
            context = {}

        source_type = self.type_resolver.resolve_source_type(source)
        destination_type = self.type_resolver.resolve_destination_type(target, allow_abstract=True)

        with assigned(context, DESTINATION_TYPE_CONTEXT, destination_type):
            mapping = self.get_mapping(source_type, destination_type)
            if mapping.provides_custom_mapper():
                logger.debug("delegating %r to a custom mapper", mapping)
                return self._get_custom_mapper(mapping).map(source, destination_type, context)

            destination = self._build_destination(
                mapping,
                source,
                destination_type,
                target if isinstance(target, type) else type(target),
                context,
            )
            logger.debug("mapping %s with %r", type_name(source_type), mapping)

            with assigned(context, DESTINATION_CONTEXT, destination), pushed(
                context, SOURCE_STACK_CONTEXT, source
            ), pushed(context, DESTINATION_STACK_CONTEXT, destination):
                return self.do_map(source, destination, mapping, context)

    def map_to_object(
        self,
        source: typing.Any,
        destination: typing.Any,
        context: typing.Optional[Context] = None,
    ) -> typing.Any:
        """
        Maps ``source`` into ``destination``, which is populated in place.

        :param Any source: An object or a record.
        :param Any destination: An existing object or record.
        :param Context context: An optional context shared with nested mapping calls.
        :return: ``destination``.
        """
        if destination is None or isinstance(destination, type):
            raise InvalidMappingTargetError(
                destination, "map_to_object requires an existing instance to populate"
            )
        if context is None:
            context = {}

        source_type = self.type_resolver.resolve_source_type(source)
        destination_type = self.type_resolver.resolve_destination_type(destination)

        with assigned(context, DESTINATION_TYPE_CONTEXT, destination_type), assigned(
            context, DESTINATION_CONTEXT, destination
        ), pushed(context, SOURCE_STACK_CONTEXT, source), pushed(
            context, DESTINATION_STACK_CONTEXT, destination
        ):
            mapping = self.get_mapping(source_type, destination_type)
            if mapping.provides_custom_mapper():
                logger.debug("delegating %r to a custom mapper", mapping)
                return self._get_custom_mapper(mapping).map_to_object(source, destination, context)
            return self.do_map(source, destination, mapping, context)

    def map_multiple(
        self,
        source_collection: typing.Iterable[typing.Any],
        destination_type: typing.Any,
        context: typing.Optional[Context] = None,
    ) -> typing.List[typing.Any]:
        """
        Maps every item of ``source_collection`` to ``destination_type``.
        The first failure aborts the whole batch.

        :param Iterable source_collection: The source values.
        :param destination_type: The destination type for every item.
        :param Context context: An optional context shared by all items.
        :return: The list of destinations in the order of the source items.
        """
        if not isinstance(source_collection, collections.abc.Iterable) or isinstance(
            source_collection, (str, bytes, collections.abc.Mapping)
        ):
            raise InvalidArgumentError(
                "the collection provided should be iterable, "
                f"got {type_name(type(source_collection))}"
            )
        if context is None:
            context = {}
        return [self.map(source, destination_type, context) for source in source_collection]

    def do_map(
        self,
        source: typing.Any,
        destination: typing.Any,
        mapping: Mapping,
        context: Context,
    ) -> typing.Any:
        """
        Populates ``destination`` property by property as ``mapping`` prescribes.

        :return: ``destination``.
        """
        for property_name in mapping.get_target_properties(destination, source):
            with pushed(context, PROPERTY_STACK_CONTEXT, property_name):
                operation = mapping.get_mapping_operation_for(property_name)
                if isinstance(operation, (MapperAware, ContextAware)):
                    # registered operations are shared by every call
                    operation = copy.copy(operation)
                    if isinstance(operation, MapperAware):
                        operation.set_mapper(self)
                    if isinstance(operation, ContextAware):
                        operation.set_context(context)
                operation.map_property(property_name, source, destination)
        return destination

    def __init__(
        self,
        registry: typing.Optional[MappingRegistry] = None,
        type_resolver: typing.Optional[TypeResolver] = None,
    ):
        self.registry = registry if registry is not None else Configuration()
        self.type_resolver = (
            type_resolver
            if type_resolver is not None
            else DefaultTypeResolverImpl(self.registry.find_destination_type)
        )
