"""Named parameter domains and their Cartesian product."""

from __future__ import annotations
import itertools
import math
from typing import Iterator


class ParamSpace:
    """An immutable, restartable Cartesian product of named value domains.

    >>> space = ParamSpace().combine("stage", ["vertex", "compute"]).combine("flag", [True, False])
    >>> len(space)
    4
    >>> next(iter(space))
    {'stage': 'vertex', 'flag': True}

    An empty space yields a single empty combination, so scenarios without
    parameters still run once.
    """

    def __init__(self, axes: tuple[tuple[str, tuple], ...] = ()):
        self._axes = tuple(axes)

    def combine(self, name: str, values) -> ParamSpace:
        values = tuple(values)
        if not values:
            raise ValueError(f"Parameter '{name}' has no values")
        if name in self.names:
            raise ValueError(f"Duplicate parameter '{name}'")
        return ParamSpace(self._axes + ((name, values),))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._axes)

    def domain(self, name: str) -> tuple:
        for axis, values in self._axes:
            if axis == name:
                return values
        raise KeyError(name)

    def __iter__(self) -> Iterator[dict]:
        names = self.names
        for combo in itertools.product(*(values for _, values in self._axes)):
            yield dict(zip(names, combo))

    def __len__(self) -> int:
        return math.prod(len(values) for _, values in self._axes)

    def __repr__(self):
        axes = ", ".join(f"{name}={list(values)!r}" for name, values in self._axes)
        return f"ParamSpace({axes})"


def format_params(params: dict) -> str:
    """Stable, human-readable case id, e.g. ``stage=vertex;usage=direct``."""
    if not params:
        return "-"
    return ";".join(f"{name}={value}" for name, value in params.items())
