"""
objmapper maps object graphs onto one another following per-type-pair rules.

.. code-block:: python

   from objmapper import AutoMapper, MapFrom

   mapper = AutoMapper.initialize(
       lambda config: config.register_mapping(dict, Person).for_member(
           "display_name", MapFrom(lambda src: src["name"].upper())
       )
   )
   person = mapper.map({"name": "Ann", "age": 5}, Person)

"""
from .configuration import Configuration, MappingImpl, Options  # noqa: F401
from .context import RESERVED_KEYS, current_path, is_visiting  # noqa: F401
from .exceptions import (  # noqa: F401
    InvalidArgumentError,
    InvalidDeclarationError,
    InvalidMappingTargetError,
    ObjMapperException,
    UnregisteredMappingError,
    UnsupportedSourceTypeError,
    UnsupportedTargetTypeError,
)
from .interfaces import (  # noqa: F401
    ContextAware,
    MapperAware,
    MapperInterface,
    Mapping,
    MappingOperation,
    MappingRegistry,
    PropertyAccessor,
    TypeResolver,
)
from .mapper import AutoMapper, CustomMapper  # noqa: F401
from .operations import (  # noqa: F401
    DefaultMappingOperation,
    FromProperty,
    Ignore,
    MapFrom,
    MapTo,
    SetTo,
)
from .types import DataType, TypeId  # noqa: F401
