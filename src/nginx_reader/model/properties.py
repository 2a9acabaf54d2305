"""Directive stores - ordered multi-valued maps with typed accessors."""

from collections.abc import Iterator
from dataclasses import dataclass

from nginx_reader.values import TypedAccessors

UNCONDITIONAL = -1


class Properties(TypedAccessors):
    """Read-only mapping from directive name to its values in declaration order.

    A directive may repeat, so every name maps to a tuple of raw values.
    """

    def __init__(self, data: dict[str, list[str]] | None = None) -> None:
        self._data: dict[str, tuple[str, ...]] = {
            name: tuple(values) for name, values in (data or {}).items()
        }

    def __getitem__(self, name: str) -> tuple[str, ...]:
        return self._data[name]

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Properties):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Properties({self._data!r})"

    def items(self) -> Iterator[tuple[str, tuple[str, ...]]]:
        return iter(self._data.items())

    def values_of(self, name: str) -> tuple[str, ...]:
        """Get all raw values of a directive (empty tuple if absent)."""
        return self._data.get(name, ())

    def get(self, name: str) -> str:
        """Get all values of a directive joined with spaces, or "" if absent."""
        return " ".join(self._data.get(name, ()))


@dataclass(frozen=True)
class ConditionalProperty:
    """A directive value tagged with the index of its enclosing if-condition."""

    condition_id: int
    value: str

    @property
    def is_conditional(self) -> bool:
        return self.condition_id != UNCONDITIONAL


class ConditionalProperties(TypedAccessors):
    """Directive store of a server or location block.

    Attributes:
        conditions: Raw expression of every ``if`` block found directly
            inside the owning block, in declaration order.
        data: Directive name -> values, each tagged with the index into
            ``conditions`` (or ``UNCONDITIONAL``).
    """

    def __init__(
        self,
        conditions: list[str] | None = None,
        data: dict[str, list[ConditionalProperty]] | None = None,
    ) -> None:
        self.conditions: tuple[str, ...] = tuple(conditions or ())
        self._data: dict[str, tuple[ConditionalProperty, ...]] = {
            name: tuple(values) for name, values in (data or {}).items()
        }

    @property
    def data(self) -> dict[str, tuple[ConditionalProperty, ...]]:
        return dict(self._data)

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConditionalProperties):
            return NotImplemented
        return self.conditions == other.conditions and self._data == other._data

    def __repr__(self) -> str:
        return f"ConditionalProperties(conditions={self.conditions!r}, data={self._data!r})"

    def get(self, name: str) -> str:
        """Get all values of a directive joined with spaces, ignoring conditions."""
        return " ".join(prop.value for prop in self._data.get(name, ()))

    def values_for(self, name: str, condition_id: int = UNCONDITIONAL) -> tuple[str, ...]:
        """Get the raw values of a directive declared under one condition."""
        return tuple(
            prop.value for prop in self._data.get(name, ()) if prop.condition_id == condition_id
        )
