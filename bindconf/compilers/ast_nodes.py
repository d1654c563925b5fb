"""AST node definitions for the WGSL declaration subset."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass
class SourceLocation:
    line: int
    column: int

    def __str__(self):
        return f"{self.line}:{self.column}"


@dataclass
class Attribute:
    name: str
    args: list[Union[int, str]] = field(default_factory=list)
    loc: Optional[SourceLocation] = None


class _Attributed:
    attributes: list[Attribute]

    def attribute(self, name: str) -> Attribute | None:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def has_attribute(self, name: str) -> bool:
        return self.attribute(name) is not None


# --- Module ---

@dataclass
class Module:
    variables: list[GlobalVar] = field(default_factory=list)
    functions: list[FunctionDef] = field(default_factory=list)

    @property
    def entry_points(self) -> list[FunctionDef]:
        return [fn for fn in self.functions if fn.stage is not None]


# --- Declarations ---

@dataclass
class GlobalVar(_Attributed):
    name: str
    type_name: str
    template: list[str] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    loc: Optional[SourceLocation] = None

    @property
    def address_space(self) -> str | None:
        return self.template[0] if self.template else None


@dataclass
class ReturnType(_Attributed):
    type_name: str
    attributes: list[Attribute] = field(default_factory=list)


@dataclass
class FunctionDef(_Attributed):
    name: str
    body: list[Stmt] = field(default_factory=list)
    return_type: Optional[ReturnType] = None
    attributes: list[Attribute] = field(default_factory=list)
    loc: Optional[SourceLocation] = None

    @property
    def stage(self) -> str | None:
        for attr in self.attributes:
            if attr.name in ("vertex", "fragment", "compute"):
                return attr.name
        return None

    @property
    def calls(self) -> set[str]:
        names = set()
        for stmt in self.body:
            if isinstance(stmt, CallStmt):
                names.add(stmt.name)
            elif isinstance(stmt, (PhonyAssign, ReturnStmt)) and isinstance(stmt.value, CallExpr):
                names.add(stmt.value.name)
        return names

    @property
    def uses(self) -> set[str]:
        """Module-scope names referenced by the body (locals excluded)."""
        names = set()
        local_names = set()
        for stmt in self.body:
            if isinstance(stmt, VarStmt):
                local_names.add(stmt.name)
            elif isinstance(stmt, (PhonyAssign, ReturnStmt)) and isinstance(stmt.value, VarRef):
                if stmt.value.name not in local_names:
                    names.add(stmt.value.name)
        return names


# --- Statements ---

@dataclass
class VarStmt(_Attributed):
    name: str
    type_name: str
    template: list[str] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    loc: Optional[SourceLocation] = None

    @property
    def address_space(self) -> str | None:
        return self.template[0] if self.template else None


@dataclass
class PhonyAssign:
    value: Expr
    loc: Optional[SourceLocation] = None


@dataclass
class CallStmt:
    name: str
    loc: Optional[SourceLocation] = None


@dataclass
class ReturnStmt:
    value: Optional[Expr] = None
    loc: Optional[SourceLocation] = None


Stmt = Union[VarStmt, PhonyAssign, CallStmt, ReturnStmt]


# --- Expressions ---

@dataclass
class VarRef:
    name: str
    loc: Optional[SourceLocation] = None


@dataclass
class CallExpr:
    name: str
    loc: Optional[SourceLocation] = None


@dataclass
class IntLit:
    value: int


Expr = Union[VarRef, CallExpr, IntLit]
