"""Binding collision oracle.

Predicts whether a conforming WGSL compiler must accept a generated program.
The prediction follows the resource interface rules:

- every resource variable carries both ``@group`` and ``@binding``;
- ``@group``/``@binding`` appear only on module-scope resource variables,
  never on plain data variables and never inside a function body;
- function-scope variables live in the function address space and cannot
  hold textures or samplers;
- two distinct resources statically used by the same entry point (directly
  or through any chain of helper calls) must not share a binding key.

Collisions are scoped per entry point. Resources that are never referenced
by an entry point are not part of its interface and cannot collide.

The oracle is a pure predicate: it never raises for a well-typed Program.
Ill-formed input (undeclared names, duplicate declarations, recursive calls)
is reported as a rejection with a reason.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from bindconf.analysis.call_graph import CallGraph
from bindconf.program.model import BindingKey, Program, LocalVariable


@dataclass
class Verdict:
    accepted: bool
    reasons: list[str] = field(default_factory=list)


def expected_verdict(program: Program) -> Verdict:
    reasons: list[str] = []
    reasons.extend(_declaration_reasons(program))
    reasons.extend(_attribute_reasons(program))
    reasons.extend(_scope_reasons(program))
    reasons.extend(_collision_reasons(program))
    return Verdict(accepted=not reasons, reasons=reasons)


def _declaration_reasons(program: Program) -> list[str]:
    reasons = []
    seen: set[str] = set()
    names = (
        [r.name for r in program.resources]
        + [v.name for v in program.variables]
        + [fn.name for fn in program.all_functions()]
    )
    for name in names:
        if name in seen:
            reasons.append(f"'{name}' is declared more than once")
        seen.add(name)

    variables = {r.name for r in program.resources} | {v.name for v in program.variables}
    functions = {fn.name for fn in program.functions}
    for fn in program.all_functions():
        for name in sorted(fn.uses - variables):
            reasons.append(f"'{fn.name}' references undeclared variable '{name}'")
        for name in sorted(fn.calls - functions):
            reasons.append(f"'{fn.name}' calls unknown function '{name}'")

    graph = CallGraph.from_functions(program.all_functions())
    for fn in program.all_functions():
        if graph.is_recursive(fn.name):
            reasons.append(f"'{fn.name}' is recursive")
    return reasons


def _attribute_reasons(program: Program) -> list[str]:
    reasons = []
    for r in program.resources:
        if r.group is None:
            reasons.append(f"resource '{r.name}' is missing @group")
        if r.binding is None:
            reasons.append(f"resource '{r.name}' is missing @binding")
    return reasons


def _scope_reasons(program: Program) -> list[str]:
    reasons = []
    for v in program.variables:
        if v.group is not None or v.binding is not None:
            reasons.append(
                f"module variable '{v.name}' in address space '{v.address_space}' "
                f"cannot have @group/@binding"
            )
    for fn in program.all_functions():
        for stmt in fn.body:
            if not isinstance(stmt, LocalVariable):
                continue
            if stmt.group is not None or stmt.binding is not None:
                reasons.append(
                    f"function-scope variable '{stmt.name}' in '{fn.name}' "
                    f"cannot have @group/@binding"
                )
            if stmt.address_space not in (None, "function"):
                reasons.append(
                    f"function-scope variable '{stmt.name}' in '{fn.name}' "
                    f"cannot be in address space '{stmt.address_space}'"
                )
            if _is_handle_type(stmt.type_name):
                reasons.append(
                    f"function-scope variable '{stmt.name}' in '{fn.name}' "
                    f"cannot have type '{stmt.type_name}'"
                )
    return reasons


def _is_handle_type(type_name: str) -> bool:
    return type_name.startswith("texture_") or type_name in ("sampler", "sampler_comparison")


def _collision_reasons(program: Program) -> list[str]:
    reasons = []
    graph = CallGraph.from_functions(program.all_functions())
    for ep in program.entry_points:
        reachable = graph.reachable_variables(ep.name)
        owners: dict[BindingKey, str] = {}
        for r in program.resources:
            key = r.key
            if key is None or r.name not in reachable:
                continue
            if key in owners and owners[key] != r.name:
                reasons.append(
                    f"entry point '{ep.name}' uses '{owners[key]}' and '{r.name}' "
                    f"at the same binding {key}"
                )
            else:
                owners.setdefault(key, r.name)
    return reasons


# --- Closed-form rules for the individual scenarios ---

def attributes_verdict(has_group: bool, has_binding: bool) -> bool:
    return has_group and has_binding


def single_entry_point_verdict(key_a: BindingKey, key_b: BindingKey) -> bool:
    return key_a != key_b


def different_entry_points_verdict() -> bool:
    return True
