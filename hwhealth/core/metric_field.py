"""Metric field values that are either present or unavailable."""
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class _Unavailable:
    """Marker for a reading the metrics provider could not supply."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNAVAILABLE"

    def __reduce__(self):
        return (_Unavailable, ())


UNAVAILABLE = _Unavailable()


@dataclass(frozen=True)
class Present(Generic[T]):
    """A reading that was successfully collected."""
    value: T


MetricField = Union[Present[T], _Unavailable]


def present(value: T) -> Present[T]:
    """Wrap a collected value."""
    return Present(value)


def from_optional(value: Optional[T]) -> "MetricField[T]":
    """Convert a provider value where None means 'not available'."""
    if value is None:
        return UNAVAILABLE
    return Present(value)


def is_present(field: Any) -> bool:
    """Return True if the field holds a value."""
    return isinstance(field, Present)


def value_or(field: "MetricField[T]", default: Any = None) -> Any:
    """Return the field value, or default when unavailable."""
    if isinstance(field, Present):
        return field.value
    return default


def exceeds(field: "MetricField[float]", limit: float) -> bool:
    """Strict greater-than check; an unavailable field never exceeds."""
    if not isinstance(field, Present):
        return False
    return field.value > limit


def below(field: "MetricField[float]", limit: float) -> bool:
    """Strict less-than check; an unavailable field is never below."""
    if not isinstance(field, Present):
        return False
    return field.value < limit
