import enum
import typing

T = typing.TypeVar("T")


def assert_not_none(value: typing.Optional[T]) -> T:
    assert value is not None
    return value


def type_name(type_id: typing.Any) -> str:
    """
    Renders a type identifier for use in messages.
    """
    if isinstance(type_id, enum.Enum):
        return str(type_id.value)
    elif isinstance(type_id, type):
        return f"{type_id.__module__}.{type_id.__qualname__}"
    return str(type_id)
