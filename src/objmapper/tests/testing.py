import abc
import dataclasses
import typing

from ..context import (
    DESTINATION_CONTEXT,
    DESTINATION_STACK_CONTEXT,
    DESTINATION_TYPE_CONTEXT,
    PROPERTY_STACK_CONTEXT,
    SOURCE_STACK_CONTEXT,
    STACK_KEYS,
    Context,
    depth,
    stack,
)
from ..interfaces import ContextAware, MappingOperation
from ..utils import assert_not_none


class Person:
    display_name: typing.Optional[str] = None
    age: typing.Optional[int] = None


@dataclasses.dataclass
class Address:
    street: str = ""
    city: str = ""


@dataclasses.dataclass
class AddressView:
    street: str = ""
    city: str = ""


@dataclasses.dataclass
class Employee:
    name: str = ""
    address: typing.Optional[Address] = None
    reports: typing.List["Employee"] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class EmployeeView:
    name: str = ""
    address: typing.Optional[AddressView] = None
    reports: typing.List["EmployeeView"] = dataclasses.field(default_factory=list)


class Shape(abc.ABC):
    @abc.abstractmethod
    def area(self) -> float:
        ...  # pragma: nocover


@dataclasses.dataclass
class Circle(Shape):
    radius: float = 0.0

    def area(self) -> float:
        return 3.0 * self.radius ** 2


@dataclasses.dataclass
class ContextSnapshot:
    property_name: str
    sources: typing.Sequence[typing.Any]
    destinations: typing.Sequence[typing.Any]
    properties: typing.Sequence[str]
    destination: typing.Any
    destination_type: typing.Any
    context: typing.Any


class SnapshotOperation(MappingOperation, ContextAware):
    """
    Stores nothing into the destination; records what the context looks like instead.
    """

    snapshots: typing.List[ContextSnapshot]
    context: typing.Optional[Context] = None

    def set_context(self, context: Context) -> None:
        self.context = context

    def map_property(self, property_name: str, source: typing.Any, destination: typing.Any) -> None:
        context = assert_not_none(self.context)
        self.snapshots.append(
            ContextSnapshot(
                property_name=property_name,
                sources=stack(context, SOURCE_STACK_CONTEXT),
                destinations=stack(context, DESTINATION_STACK_CONTEXT),
                properties=stack(context, PROPERTY_STACK_CONTEXT),
                destination=context.get(DESTINATION_CONTEXT),
                destination_type=context.get(DESTINATION_TYPE_CONTEXT),
                context=context,
            )
        )

    def __init__(self):
        self.snapshots = []


class RaisingOperation(MappingOperation):
    exc: Exception

    def map_property(self, property_name: str, source: typing.Any, destination: typing.Any) -> None:
        raise self.exc

    def __init__(self, exc: Exception):
        self.exc = exc


def stack_depths(context: Context) -> typing.Tuple[int, ...]:
    return tuple(depth(context, key) for key in STACK_KEYS)
