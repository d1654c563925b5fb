"""In-memory description of a generated WGSL program.

Scenario builders produce a ``Program``; the synthesizer renders it to text
and the collision oracle predicts whether a compiler must accept it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Union

from bindconf.program.kinds import ResourceKind


STAGES = ("vertex", "fragment", "compute")
USAGES = ("direct", "transitive")


@dataclass(frozen=True)
class BindingKey:
    group: int
    binding: int

    def __str__(self):
        return f"@group({self.group}) @binding({self.binding})"


# --- Declarations ---

@dataclass
class ResourceDeclaration:
    name: str
    kind: ResourceKind
    group: Optional[int] = None
    binding: Optional[int] = None

    @property
    def key(self) -> BindingKey | None:
        if self.group is None or self.binding is None:
            return None
        return BindingKey(self.group, self.binding)


@dataclass
class ModuleVariable:
    """A plain data variable at module scope, e.g. ``var<private>``."""
    name: str
    address_space: str
    type_name: str
    group: Optional[int] = None
    binding: Optional[int] = None


@dataclass
class LocalVariable:
    """A ``var`` statement inside a function body."""
    name: str
    type_name: str
    address_space: Optional[str] = None
    group: Optional[int] = None
    binding: Optional[int] = None


# --- Statements ---

@dataclass
class Use:
    """Phony assignment ``_ = name;``."""
    name: str


@dataclass
class Call:
    name: str


Statement = Union[Use, Call, LocalVariable]


# --- Functions ---

@dataclass
class Function:
    name: str
    body: list[Statement] = field(default_factory=list)

    @property
    def calls(self) -> set[str]:
        return {s.name for s in self.body if isinstance(s, Call)}

    @property
    def uses(self) -> set[str]:
        """Module-scope names referenced by the body (locals excluded)."""
        names = set()
        local_names = set()
        for stmt in self.body:
            if isinstance(stmt, LocalVariable):
                local_names.add(stmt.name)
            elif isinstance(stmt, Use) and stmt.name not in local_names:
                names.add(stmt.name)
        return names


@dataclass
class EntryPoint(Function):
    stage: str = "compute"


@dataclass
class Program:
    resources: list[ResourceDeclaration] = field(default_factory=list)
    variables: list[ModuleVariable] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)
    entry_points: list[EntryPoint] = field(default_factory=list)

    def all_functions(self) -> list[Function]:
        return [*self.functions, *self.entry_points]
