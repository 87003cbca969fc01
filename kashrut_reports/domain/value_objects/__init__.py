# Value Objects - Immutable domain primitives
from .email import Email
from .numbers import parse_optional_int, coerce_optional_int

__all__ = ['Email', 'parse_optional_int', 'coerce_optional_int']
