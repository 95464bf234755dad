"""
objmapper.declarative module lets a mapping be described by a plain class,
typically named ``Meta``, instead of a chain of method calls.

Synopsis
--------

.. code-block:: python

   from objmapper import AutoMapper, MapFrom

   class PersonMeta:
       members = {
           "display_name": MapFrom(lambda src: src["name"].upper()),
       }
       ignore = ["password_hash"]

   mapper = AutoMapper.initialize(
       lambda config: config.register_mapping(dict, Person, meta=PersonMeta)
   )

"""
import collections.abc
import dataclasses
import typing

from .exceptions import InvalidDeclarationError
from .interfaces import CustomConstructor, MapperInterface, MappingOperation
from .utils import english_enumerate

MemberDeclaration = typing.Union[MappingOperation, typing.Callable[[typing.Any], typing.Any]]


@dataclasses.dataclass
class Meta:
    members: typing.Mapping[str, MemberDeclaration] = dataclasses.field(default_factory=dict)
    ignore: typing.Sequence[str] = ()
    construct_using: typing.Optional[CustomConstructor] = None
    custom_mapper: typing.Optional[MapperInterface] = None


_meta_fields = frozenset(f.name for f in dataclasses.fields(Meta))


def handle_meta(meta: typing.Type) -> Meta:
    attrs = {k: v for k, v in vars(meta).items() if not k.startswith("__")}

    unknown = sorted(k for k in attrs if k not in _meta_fields)
    if unknown:
        raise InvalidDeclarationError(
            f"unknown attribute(s) in {meta.__qualname__}: {english_enumerate(unknown)}"
        )

    members = attrs.get("members", {})
    if not isinstance(members, collections.abc.Mapping):
        raise InvalidDeclarationError(
            f"{meta.__qualname__}.members must map property names to operations"
        )

    ignore = attrs.get("ignore", ())
    if isinstance(ignore, str):
        ignore = (ignore,)

    construct_using = attrs.get("construct_using")
    if isinstance(construct_using, staticmethod):
        construct_using = construct_using.__func__

    return Meta(
        members=dict(members),
        ignore=tuple(ignore),
        construct_using=construct_using,
        custom_mapper=attrs.get("custom_mapper"),
    )


def apply_meta(mapping: "MappingImpl", meta: Meta) -> "MappingImpl":
    for name, operation in meta.members.items():
        mapping.for_member(name, operation)
    for name in meta.ignore:
        mapping.ignore_member(name)
    if meta.construct_using is not None:
        mapping.construct_using(meta.construct_using)
    if meta.custom_mapper is not None:
        mapping.use_custom_mapper(meta.custom_mapper)
    return mapping


if typing.TYPE_CHECKING:
    from .configuration import MappingImpl  # noqa: E402
