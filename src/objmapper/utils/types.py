import typing


class UnspecifiedType:
    """
    The type of :py:const:`UNSPECIFIED`, a falsy marker that stands for
    "no value at all" where :py:const:`None` is a legitimate value.
    """

    _singleton: typing.ClassVar[typing.Optional["UnspecifiedType"]] = None

    def __bool__(self):
        return False

    def __repr__(self):
        return "UNSPECIFIED"

    def __new__(cls) -> "UnspecifiedType":
        if cls._singleton is None:
            cls._singleton = object.__new__(cls)
        return cls._singleton


UNSPECIFIED = UnspecifiedType()
