import collections.abc
import enum
import inspect
import numbers
import typing


class DataType(str, enum.Enum):
    """
    Tags for the data shapes that are not identified by a class of their own.
    """

    ARRAY = "array"
    """Any :py:class:`collections.abc.Mapping`, used as a structured record."""


TypeId = typing.Union[type, DataType]
"""
Identifies either a concrete class or a :py:class:`DataType` shape.
"""


PRIMITIVE_TYPES: typing.Tuple[typing.Type, ...] = (
    type(None),
    numbers.Number,
    str,
    bytes,
    bytearray,
    collections.abc.Sequence,
    collections.abc.Set,
)
"""
Values of these types carry no properties and thus are never mapped as a whole.
"""


def is_record(value: typing.Any) -> bool:
    return isinstance(value, collections.abc.Mapping)


def is_primitive(value: typing.Any) -> bool:
    return not is_record(value) and isinstance(value, PRIMITIVE_TYPES)


def is_abstract_type(type_id: TypeId) -> bool:
    """
    Returns :py:const:`True` if ``type_id`` names a class that cannot be instantiated
    as is, that is an abstract base class with abstract members or a protocol.
    """
    if not isinstance(type_id, type):
        return False
    return inspect.isabstract(type_id) or bool(getattr(type_id, "_is_protocol", False))


def normalize_type_id(type_id: typing.Union[TypeId, str]) -> TypeId:
    """
    Folds the alternative spellings of a record shape into :py:attr:`DataType.ARRAY`.
    """
    if isinstance(type_id, DataType):
        return type_id
    elif isinstance(type_id, str):
        return DataType(type_id)
    elif isinstance(type_id, type) and issubclass(type_id, collections.abc.Mapping):
        return DataType.ARRAY
    return type_id
