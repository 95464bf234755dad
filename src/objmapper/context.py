"""
Bookkeeping of the mapping context.

A context is a plain mutable mapping that is shared by reference by a top-level
:py:meth:`objmapper.mapper.AutoMapper.map` call and every mapping call it triggers
recursively.  Besides whatever the caller puts into it, the mapper maintains the
following entries:

* ``__source_stack``: the source objects being mapped, outermost first.
* ``__destination_stack``: the destination objects being populated, outermost first.
* ``__property_stack``: the destination property names being mapped, outermost first.
* ``__destination``: the destination object of the innermost call.
* ``__destination_type``: the destination type identifier of the innermost call.

A context must not be shared by mapping calls running concurrently.
"""
import contextlib
import typing

from .utils import UNSPECIFIED

SOURCE_STACK_CONTEXT = "__source_stack"
DESTINATION_STACK_CONTEXT = "__destination_stack"
PROPERTY_STACK_CONTEXT = "__property_stack"
DESTINATION_CONTEXT = "__destination"
DESTINATION_TYPE_CONTEXT = "__destination_type"

STACK_KEYS = (
    SOURCE_STACK_CONTEXT,
    DESTINATION_STACK_CONTEXT,
    PROPERTY_STACK_CONTEXT,
)

RESERVED_KEYS = frozenset(STACK_KEYS + (DESTINATION_CONTEXT, DESTINATION_TYPE_CONTEXT))


Context = typing.MutableMapping[str, typing.Any]


def push(key: str, value: typing.Any, context: Context) -> None:
    stack = context.get(key)
    if stack is None:
        stack = context[key] = []
    stack.append(value)


def pop(key: str, context: Context) -> typing.Any:
    return context[key].pop()


@contextlib.contextmanager
def pushed(context: Context, key: str, value: typing.Any) -> typing.Iterator[None]:
    """
    Pushes ``value`` onto the stack named ``key`` for the duration of the block.
    """
    push(key, value, context)
    try:
        yield
    finally:
        pop(key, context)


@contextlib.contextmanager
def assigned(context: Context, key: str, value: typing.Any) -> typing.Iterator[None]:
    """
    Sets ``key`` to ``value`` for the duration of the block, restoring the previous
    value (or the absence of one) afterwards.
    """
    prev_value = context.get(key, UNSPECIFIED)
    context[key] = value
    try:
        yield
    finally:
        if prev_value is UNSPECIFIED:
            context.pop(key, None)
        else:
            context[key] = prev_value


def stack(context: typing.Mapping[str, typing.Any], key: str) -> typing.Sequence[typing.Any]:
    return tuple(context.get(key, ()))


def depth(context: typing.Mapping[str, typing.Any], key: str) -> int:
    return len(context.get(key, ()))


def current_path(context: typing.Mapping[str, typing.Any]) -> str:
    """
    Returns the dotted path of destination properties leading to the property being mapped.
    """
    return ".".join(str(name) for name in context.get(PROPERTY_STACK_CONTEXT, ()))


def is_visiting(context: typing.Mapping[str, typing.Any], source: typing.Any) -> bool:
    """
    Returns :py:const:`True` if ``source`` is already being mapped by an enclosing call,
    which means mapping it again would never terminate.
    """
    return any(s is source for s in context.get(SOURCE_STACK_CONTEXT, ()))
