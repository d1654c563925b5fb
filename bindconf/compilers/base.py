"""Compiler oracle interface consumed by the runner."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class CompileResult:
    accepted: bool
    diagnostics: list[str] = field(default_factory=list)


class CompilerError(Exception):
    """The compiler could not be invoked at all (not a rejection)."""


class Compiler(Protocol):
    name: str

    def validate(self, source: str) -> CompileResult:
        """Compile WGSL source and report whether it was accepted.

        Must be deterministic for a fixed source text.
        """
        ...


COMPILER_NAMES = ("reference", "naga")


def get_compiler(name: str, naga_path: str | None = None) -> Compiler:
    if name == "reference":
        from bindconf.compilers.reference import ReferenceCompiler
        return ReferenceCompiler()
    elif name == "naga":
        from bindconf.compilers.naga import NagaCompiler, DEFAULT_NAGA
        return NagaCompiler(naga_path or DEFAULT_NAGA)
    raise ValueError(f"Unknown compiler '{name}' (expected one of {', '.join(COMPILER_NAMES)})")
