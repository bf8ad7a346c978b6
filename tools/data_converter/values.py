"""Format-neutral value model used as the pivot between formats."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple, Union

from .errors import InternalInvariantError

U64_MAX = 2**64 - 1
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


class ValueKind(str, Enum):
    """Tag of a neutral value."""

    NULL = "null"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


class Value:
    """
    Base of the closed set of neutral values.

    Subclasses are frozen dataclasses; trees are built once and never mutated.
    """

    kind: ValueKind

    def children(self) -> Iterator["Value"]:
        """Yield direct children in stored order."""
        return iter(())

    def walk(self) -> Iterator["Value"]:
        """Yield this value and all nested values, depth-first, pre-order."""
        yield self
        for child in self.children():
            yield from child.walk()


@dataclass(frozen=True)
class Null(Value):
    kind = ValueKind.NULL


@dataclass(frozen=True)
class Bool(Value):
    value: bool

    kind = ValueKind.BOOL


@dataclass(frozen=True)
class Int(Value):
    """Signed 64-bit integer."""

    value: int

    kind = ValueKind.INT

    def __post_init__(self):
        if not I64_MIN <= self.value <= I64_MAX:
            raise InternalInvariantError(f"Int out of signed 64-bit range: {self.value}")


@dataclass(frozen=True)
class UInt(Value):
    """Unsigned 64-bit integer."""

    value: int

    kind = ValueKind.UINT

    def __post_init__(self):
        if not 0 <= self.value <= U64_MAX:
            raise InternalInvariantError(f"UInt out of unsigned 64-bit range: {self.value}")


@dataclass(frozen=True, eq=False)
class Float(Value):
    """64-bit float; NaN compares equal to NaN."""

    value: float

    kind = ValueKind.FLOAT

    def __eq__(self, other):
        if not isinstance(other, Float):
            return NotImplemented
        if math.isnan(self.value) and math.isnan(other.value):
            return True
        return self.value == other.value

    def __hash__(self):
        return hash("nan") if math.isnan(self.value) else hash(self.value)

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.value)


@dataclass(frozen=True)
class String(Value):
    value: str

    kind = ValueKind.STRING


@dataclass(frozen=True)
class Sequence(Value):
    items: Tuple[Value, ...] = ()

    kind = ValueKind.SEQUENCE

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def children(self) -> Iterator[Value]:
        return iter(self.items)


@dataclass(frozen=True)
class Mapping(Value):
    """Ordered mapping with unique keys."""

    items: Tuple[Tuple[Value, Value], ...] = ()

    kind = ValueKind.MAPPING

    def __post_init__(self):
        seen = set()
        for key, _ in self.items:
            if key in seen:
                raise InternalInvariantError(f"Duplicate mapping key: {key!r}")
            seen.add(key)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Value, Value]]) -> "Mapping":
        return cls(tuple(pairs))

    def __len__(self) -> int:
        return len(self.items)

    def keys(self) -> Iterator[Value]:
        return (key for key, _ in self.items)

    def get(self, key: Value) -> Optional[Value]:
        for k, v in self.items:
            if k == key:
                return v
        return None

    def children(self) -> Iterator[Value]:
        for key, value in self.items:
            yield key
            yield value


def number(value: Union[int, float]) -> Value:
    """
    Pick the numeric subkind for a native number.

    Non-negative integers fitting in u64 become UInt, negative integers
    fitting in i64 become Int, everything else becomes Float.

    Raises:
        InternalInvariantError: If the number has no 64-bit representation
    """
    if isinstance(value, bool):
        raise InternalInvariantError("Booleans are not numbers")

    if isinstance(value, int):
        if 0 <= value <= U64_MAX:
            return UInt(value)
        if I64_MIN <= value < 0:
            return Int(value)
        try:
            return Float(float(value))
        except OverflowError:
            raise InternalInvariantError(f"Integer has no 64-bit representation: {value}")

    if isinstance(value, float):
        return Float(value)

    raise InternalInvariantError(f"Not a number: {value!r}")
