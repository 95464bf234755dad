import abc
import typing

from .utils import type_name


class ObjMapperException(Exception, metaclass=abc.ABCMeta):
    message: str

    def __str__(self):
        return self.message


class InvalidDeclarationError(ObjMapperException):
    message: str

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(ObjMapperException):
    message: str

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedSourceTypeError(ObjMapperException):
    """
    Raised when a source value is neither an object nor a record the mapper can work on.
    """

    type: typing.Type

    @property
    def message(self):
        return f"unsupported source type: {type_name(self.type)}"

    def __init__(self, type: typing.Type):
        super().__init__(type)
        self.type = type


class UnsupportedTargetTypeError(ObjMapperException):
    """
    Raised when a target specification cannot be resolved to a type identifier.
    """

    target: typing.Any
    detail: typing.Optional[str]

    @property
    def message(self):
        if self.detail is not None:
            return f"unsupported target {self.target!r}: {self.detail}"
        return f"unsupported target type: {type_name(type(self.target))}"

    def __init__(self, target: typing.Any, detail: typing.Optional[str] = None):
        super().__init__(target, detail)
        self.target = target
        self.detail = detail


class UnregisteredMappingError(ObjMapperException):
    source_type: typing.Any
    destination_type: typing.Any

    @property
    def message(self):
        return (
            f"no mapping registered for converting {type_name(self.source_type)} "
            f"to {type_name(self.destination_type)}"
        )

    def __init__(self, source_type: typing.Any, destination_type: typing.Any):
        super().__init__(source_type, destination_type)
        self.source_type = source_type
        self.destination_type = destination_type


class InvalidMappingTargetError(ObjMapperException):
    destination_type: typing.Any
    detail: str

    @property
    def message(self):
        return f"cannot map to {type_name(self.destination_type)}: {self.detail}"

    def __init__(self, destination_type: typing.Any, detail: str):
        super().__init__(destination_type, detail)
        self.destination_type = destination_type
        self.detail = detail
