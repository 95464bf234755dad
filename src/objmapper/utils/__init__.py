from .formatting import english_enumerate  # noqa
from .types import UNSPECIFIED, UnspecifiedType  # noqa
from .typing import assert_not_none, type_name  # noqa
