"""Conformance scenarios for the @group/@binding attribute rules.

Each scenario pairs a parameter space with a builder that turns one
parameter combination into a Program. Scenarios are plain values collected
in SCENARIOS; nothing registers itself at import time.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

from bindconf.matrix.params import ParamSpace
from bindconf.program.kinds import KINDS_A, KINDS_B, KINDS_ALL
from bindconf.program.model import (
    Program, ResourceDeclaration, ModuleVariable, LocalVariable,
    EntryPoint, Use, STAGES, USAGES,
)
from bindconf.program.synthesizer import add_entry_point

# Equal and unequal group/binding values without blowing up the matrix.
INDEX_VALUES = (0, 3)


@dataclass(frozen=True)
class Scenario:
    name: str
    description: str
    build: Callable[[dict], Program]
    params: ParamSpace = field(default_factory=ParamSpace)

    def __len__(self) -> int:
        return len(self.params)


# --- binding_attributes ---

def _build_binding_attributes(p: dict) -> Program:
    resource = ResourceDeclaration(
        "R",
        p["resource"],
        group=0 if p["has_group"] else None,
        binding=0 if p["has_binding"] else None,
    )
    program = Program(resources=[resource])
    add_entry_point(program, "main", p["stage"], ["R"], "direct")
    return program


# --- Scope restrictions ---

def _build_private_module_scope(p: dict) -> Program:
    return Program(
        variables=[ModuleVariable("a", "private", "i32", group=1, binding=1)],
        entry_points=[EntryPoint("main", [Use("a")], stage="compute")],
    )


def _build_private_function_scope(p: dict) -> Program:
    local = LocalVariable("a", "i32", address_space="private", group=1, binding=1)
    return Program(entry_points=[EntryPoint("main", [local], stage="compute")])


def _build_function_scope(p: dict) -> Program:
    local = LocalVariable("a", "i32", group=1, binding=1)
    return Program(entry_points=[EntryPoint("main", [local], stage="compute")])


def _build_function_scope_texture(p: dict) -> Program:
    local = LocalVariable("a", "texture_2d<f32>", group=1, binding=1)
    return Program(entry_points=[EntryPoint("main", [local], stage="compute")])


# --- Binding collisions ---

def _build_single_entry_point(p: dict) -> Program:
    program = Program(resources=[
        ResourceDeclaration("resource_a", p["a_kind"], p["a_group"], p["a_binding"]),
        ResourceDeclaration("resource_b", p["b_kind"], p["b_group"], p["b_binding"]),
    ])
    add_entry_point(program, "main", p["stage"], ["resource_a", "resource_b"], p["usage"])
    return program


def _build_different_entry_points(p: dict) -> Program:
    program = Program(resources=[
        ResourceDeclaration("resource_a", p["a_kind"], 0, 0),
        ResourceDeclaration("resource_b", p["b_kind"], 0, 0),
    ])
    add_entry_point(program, "main_a", p["a_stage"], ["resource_a"], p["usage"])
    add_entry_point(program, "main_b", p["b_stage"], ["resource_b"], p["usage"])
    return program


def _build_unreferenced_resource(p: dict) -> Program:
    program = Program(resources=[
        ResourceDeclaration("resource_a", p["a_kind"], 0, 0),
        ResourceDeclaration("resource_b", p["b_kind"], 0, 0),
    ])
    add_entry_point(program, "main", p["stage"], ["resource_a"], p["usage"])
    return program


SCENARIOS = (
    Scenario(
        "binding_attributes",
        "Both @group and @binding must be declared on a resource.",
        _build_binding_attributes,
        ParamSpace()
        .combine("stage", STAGES)
        .combine("has_group", (True, False))
        .combine("has_binding", (True, False))
        .combine("resource", KINDS_ALL),
    ),
    Scenario(
        "private_module_scope",
        "@group/@binding on a module-scope var<private> is rejected.",
        _build_private_module_scope,
    ),
    Scenario(
        "private_function_scope",
        "@group/@binding on a function-scope var<private> is rejected.",
        _build_private_function_scope,
    ),
    Scenario(
        "function_scope",
        "@group/@binding on a function-scope variable is rejected.",
        _build_function_scope,
    ),
    Scenario(
        "function_scope_texture",
        "@group/@binding on a function-scope texture variable is rejected.",
        _build_function_scope_texture,
    ),
    Scenario(
        "single_entry_point",
        "Two resources used by one entry point must not share a (group, binding) pair.",
        _build_single_entry_point,
        ParamSpace()
        .combine("stage", STAGES)
        .combine("a_kind", KINDS_A)
        .combine("b_kind", KINDS_B)
        .combine("a_group", INDEX_VALUES)
        .combine("b_group", INDEX_VALUES)
        .combine("a_binding", INDEX_VALUES)
        .combine("b_binding", INDEX_VALUES)
        .combine("usage", USAGES),
    ),
    Scenario(
        "different_entry_points",
        "Resources used exclusively by different entry points may share a binding.",
        _build_different_entry_points,
        ParamSpace()
        .combine("a_stage", STAGES)
        .combine("b_stage", STAGES)
        .combine("a_kind", KINDS_A)
        .combine("b_kind", KINDS_B)
        .combine("usage", USAGES),
    ),
    Scenario(
        "unreferenced_resource",
        "A resource no entry point references cannot collide with a used one.",
        _build_unreferenced_resource,
        ParamSpace()
        .combine("stage", STAGES)
        .combine("a_kind", KINDS_A)
        .combine("b_kind", KINDS_B)
        .combine("usage", USAGES),
    ),
)


def get_scenario(name: str) -> Scenario:
    for scenario in SCENARIOS:
        if scenario.name == name:
            return scenario
    raise KeyError(f"Unknown scenario '{name}'")


def iter_cases(scenarios: Iterable[Scenario] = SCENARIOS) -> Iterator[tuple[Scenario, dict]]:
    for scenario in scenarios:
        for params in scenario.params:
            yield scenario, params
