"""Render a Program model to WGSL source text."""

from __future__ import annotations

from bindconf.program.emitters import declare_entrypoint, declare_resource, declare_var
from bindconf.program.model import (
    Program, Function, EntryPoint, Use, Call, LocalVariable, USAGES,
)


def helper_name(resource_name: str) -> str:
    return f"use_{resource_name}"


def use_resources(
    entry_name: str,
    stage: str,
    resource_names: list[str],
    usage: str,
) -> tuple[EntryPoint, list[Function]]:
    """Build an entry point that references each resource.

    ``direct`` usage references every resource from the entry point body.
    ``transitive`` usage wraps each reference in its own helper function
    and has the entry point call the helpers instead.
    """
    if usage not in USAGES:
        raise ValueError(f"Unknown usage '{usage}' (expected one of {', '.join(USAGES)})")

    if usage == "direct":
        body = [Use(name) for name in resource_names]
        return EntryPoint(entry_name, body, stage=stage), []

    helpers = [Function(helper_name(name), [Use(name)]) for name in resource_names]
    body = [Call(h.name) for h in helpers]
    return EntryPoint(entry_name, body, stage=stage), helpers


def add_entry_point(
    program: Program,
    entry_name: str,
    stage: str,
    resource_names: list[str],
    usage: str,
) -> EntryPoint:
    entry, helpers = use_resources(entry_name, stage, resource_names, usage)
    existing = {fn.name for fn in program.functions}
    for helper in helpers:
        if helper.name not in existing:
            program.functions.append(helper)
            existing.add(helper.name)
    program.entry_points.append(entry)
    return entry


def render_statement(stmt) -> str:
    if isinstance(stmt, Use):
        return f"_ = {stmt.name};"
    elif isinstance(stmt, Call):
        return f"{stmt.name}();"
    elif isinstance(stmt, LocalVariable):
        decl = declare_var(
            stmt.name, stmt.type_name, stmt.address_space, stmt.group, stmt.binding,
        )
        # Attributes go on their own line, as a reader would write them.
        return decl.replace(") var", ")\n  var", 1)
    raise TypeError(f"Unknown statement type: {type(stmt)}")


def render_body(statements) -> str:
    return "\n  ".join(render_statement(s) for s in statements)


def render_function(fn: Function) -> str:
    if isinstance(fn, EntryPoint):
        return declare_entrypoint(fn.name, fn.stage, render_body(fn.body))
    if len(fn.body) > 1:
        return f"fn {fn.name}() {{\n  {render_body(fn.body)}\n}}"
    return f"fn {fn.name}() {{ {render_body(fn.body)} }}"


def render_program(program: Program) -> str:
    sections = []

    decls = [
        declare_resource(r.kind, r.name, r.group, r.binding) for r in program.resources
    ]
    decls.extend(
        declare_var(v.name, v.type_name, v.address_space, v.group, v.binding)
        for v in program.variables
    )
    if decls:
        sections.append("\n".join(decls))

    if program.functions:
        sections.append("\n".join(render_function(fn) for fn in program.functions))

    sections.extend(render_function(ep) for ep in program.entry_points)
    return "\n\n".join(sections) + "\n"
