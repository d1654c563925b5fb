"""Reference compiler for the WGSL declaration subset.

Parses the subset emitted by the program synthesizer with lark and checks
the resource interface rules on the parsed module. It stands in for a real
WGSL front end when none is installed; it does not type-check expressions.
"""

from __future__ import annotations
from pathlib import Path
from lark import Lark, Transformer, Token
from lark.exceptions import UnexpectedInput

from bindconf.analysis.call_graph import CallGraph
from bindconf.compilers.ast_nodes import (
    Module, GlobalVar, FunctionDef, ReturnType, Attribute, SourceLocation,
    VarStmt, PhonyAssign, CallStmt, ReturnStmt, VarRef, CallExpr, IntLit,
)
from bindconf.compilers.base import CompileResult

_GRAMMAR_PATH = Path(__file__).parent.parent / "grammar" / "wgsl.lark"

_parser = Lark(
    _GRAMMAR_PATH.read_text(encoding="utf-8"),
    parser="lalr",
    propagate_positions=True,
)

_HANDLE_TYPES = ("sampler", "sampler_comparison")
_RESOURCE_ADDRESS_SPACES = ("uniform", "storage")
_DATA_ADDRESS_SPACES = ("private", "workgroup")
_BUILTIN_CONSTRUCTORS = frozenset({
    "vec4f", "vec4i", "vec4u", "vec4h", "vec4",
})


class WgslSyntaxError(Exception):
    pass


class BindingError(Exception):
    pass


def _tok_loc(tok: Token) -> SourceLocation | None:
    if tok is not None and hasattr(tok, "line"):
        return SourceLocation(tok.line, tok.column)
    return None


def _int_value(tok: Token) -> int:
    return int(str(tok).rstrip("iu"))


class WgslTransformer(Transformer):
    # --- Module ---

    def start(self, items):
        mod = Module()
        for item in items:
            if isinstance(item, GlobalVar):
                mod.variables.append(item)
            elif isinstance(item, FunctionDef):
                mod.functions.append(item)
        return mod

    def global_var(self, args):
        attrs, template, name, type_name = _split_var(args)
        return GlobalVar(str(name), type_name, template, attrs, _tok_loc(name))

    def function_decl(self, args):
        attrs, name = args[0], args[1]
        return_type = None
        body = []
        for a in args[2:]:
            if isinstance(a, ReturnType):
                return_type = a
            else:
                body.append(a)
        return FunctionDef(str(name), body, return_type, attrs, _tok_loc(name))

    def return_type(self, args):
        return ReturnType(args[1], args[0])

    # --- Attributes ---

    def attrs(self, args):
        return list(args)

    def attribute(self, args):
        name = args[0]
        return Attribute(str(name), list(args[1:]), _tok_loc(name))

    def attr_arg(self, args):
        tok = args[0]
        if tok.type == "INT":
            return _int_value(tok)
        return str(tok)

    # --- Types ---

    def var_template(self, args):
        return [str(a) for a in args]

    def type_spec(self, args):
        name = str(args[0])
        if len(args) > 1:
            return f"{name}<{', '.join(args[1])}>"
        return name

    def type_params(self, args):
        return [str(a) for a in args]

    # --- Statements ---

    def phony_assign(self, args):
        return PhonyAssign(args[0])

    def call_stmt(self, args):
        return CallStmt(str(args[0]), _tok_loc(args[0]))

    def local_var(self, args):
        attrs, template, name, type_name = _split_var(args)
        return VarStmt(str(name), type_name, template, attrs, _tok_loc(name))

    def return_stmt(self, args):
        return ReturnStmt(args[0] if args else None)

    # --- Expressions ---

    def call_expr(self, args):
        return CallExpr(str(args[0]), _tok_loc(args[0]))

    def var_ref(self, args):
        return VarRef(str(args[0]), _tok_loc(args[0]))

    def int_lit(self, args):
        return IntLit(_int_value(args[0]))


def _split_var(args):
    """Unpack [attrs, template?, NAME, type] for var declarations."""
    attrs = args[0]
    if isinstance(args[1], list):
        return attrs, args[1], args[2], args[3]
    return attrs, [], args[1], args[2]


def parse_wgsl(source: str) -> Module:
    try:
        tree = _parser.parse(source)
    except UnexpectedInput as e:
        raise WgslSyntaxError(
            f"{e.line}:{e.column}: syntax error\n{e.get_context(source)}"
        ) from e
    return WgslTransformer().transform(tree)


def check_bindings(module: Module) -> None:
    checker = BindingChecker(module)
    checker.check()


class BindingChecker:
    def __init__(self, module: Module):
        self.module = module
        self.globals = {v.name: v for v in module.variables}
        self.functions = {fn.name: fn for fn in module.functions}
        self.graph = CallGraph.from_functions(module.functions)

    def check(self):
        self._check_unique_names()
        for var in self.module.variables:
            self._check_global(var)
        for fn in self.module.functions:
            self._check_function(fn)
        for ep in self.module.entry_points:
            self._check_entry_point(ep)
            self._check_interface(ep)

    def _check_unique_names(self):
        seen = set()
        for decl in [*self.module.variables, *self.module.functions]:
            if decl.name in seen:
                raise BindingError(f"{decl.loc}: redeclaration of '{decl.name}'")
            seen.add(decl.name)

    def _check_global(self, var: GlobalVar):
        group = _index_attribute(var, "group")
        binding = _index_attribute(var, "binding")

        if is_resource(var):
            if group is None:
                raise BindingError(f"{var.loc}: resource variable '{var.name}' requires @group")
            if binding is None:
                raise BindingError(f"{var.loc}: resource variable '{var.name}' requires @binding")
            return

        if group is not None or binding is not None:
            raise BindingError(
                f"{var.loc}: @group/@binding may only be applied to resource variables, "
                f"not '{var.name}' in address space '{var.address_space}'"
            )
        if var.address_space is None:
            raise BindingError(f"{var.loc}: module-scope variable '{var.name}' requires an address space")
        if var.address_space not in _DATA_ADDRESS_SPACES:
            raise BindingError(f"{var.loc}: unknown address space '{var.address_space}'")

    def _check_function(self, fn: FunctionDef):
        local_names = set()
        for stmt in fn.body:
            if isinstance(stmt, VarStmt):
                if stmt.has_attribute("group") or stmt.has_attribute("binding"):
                    raise BindingError(
                        f"{stmt.loc}: @group/@binding are not valid on function-scope "
                        f"variable '{stmt.name}'"
                    )
                if stmt.address_space not in (None, "function"):
                    raise BindingError(
                        f"{stmt.loc}: function-scope variable '{stmt.name}' cannot be "
                        f"in address space '{stmt.address_space}'"
                    )
                if _is_handle_type(stmt.type_name):
                    raise BindingError(
                        f"{stmt.loc}: function-scope variable '{stmt.name}' cannot have "
                        f"type '{stmt.type_name}'"
                    )
                local_names.add(stmt.name)
            elif isinstance(stmt, CallStmt):
                self._check_callee(fn, stmt.name)
            elif isinstance(stmt, (PhonyAssign, ReturnStmt)):
                self._check_expr(fn, stmt.value, local_names)

        if self.graph.is_recursive(fn.name):
            raise BindingError(f"{fn.loc}: function '{fn.name}' is recursive")

    def _check_callee(self, fn: FunctionDef, name: str):
        callee = self.functions.get(name)
        if callee is None:
            raise BindingError(f"unresolved call target '{name}' in '{fn.name}'")
        if callee.stage is not None:
            raise BindingError(f"entry point '{name}' cannot be called from '{fn.name}'")

    def _check_expr(self, fn: FunctionDef, expr, local_names: set[str]):
        if isinstance(expr, VarRef):
            if expr.name not in local_names and expr.name not in self.globals:
                raise BindingError(f"{expr.loc}: unresolved identifier '{expr.name}'")
        elif isinstance(expr, CallExpr):
            if expr.name not in _BUILTIN_CONSTRUCTORS:
                self._check_callee(fn, expr.name)

    def _check_entry_point(self, ep: FunctionDef):
        if ep.stage == "compute" and not ep.has_attribute("workgroup_size"):
            raise BindingError(f"{ep.loc}: compute entry point '{ep.name}' requires @workgroup_size")
        if ep.stage == "vertex":
            if ep.return_type is None or not ep.return_type.has_attribute("builtin"):
                raise BindingError(
                    f"{ep.loc}: vertex entry point '{ep.name}' must return @builtin(position)"
                )

    def _check_interface(self, ep: FunctionDef):
        used = self.graph.reachable_variables(ep.name)
        owners: dict[tuple[int, int], str] = {}
        for var in self.module.variables:
            if var.name not in used or not is_resource(var):
                continue
            key = (_index_attribute(var, "group"), _index_attribute(var, "binding"))
            if key in owners:
                raise BindingError(
                    f"{var.loc}: '{var.name}' and '{owners[key]}' used by entry point "
                    f"'{ep.name}' share @group({key[0]}) @binding({key[1]})"
                )
            owners[key] = var.name


def is_resource(var: GlobalVar) -> bool:
    if var.address_space is None:
        return _is_handle_type(var.type_name)
    return var.address_space in _RESOURCE_ADDRESS_SPACES


def _is_handle_type(type_name: str) -> bool:
    return type_name.startswith("texture_") or type_name in _HANDLE_TYPES


def _index_attribute(decl, name: str) -> int | None:
    attr = decl.attribute(name)
    if attr is None:
        return None
    if len(attr.args) != 1 or not isinstance(attr.args[0], int):
        raise BindingError(f"{attr.loc}: @{name} requires a single non-negative integer")
    return attr.args[0]


class ReferenceCompiler:
    name = "reference"

    def validate(self, source: str) -> CompileResult:
        try:
            check_bindings(parse_wgsl(source))
        except (WgslSyntaxError, BindingError) as e:
            return CompileResult(accepted=False, diagnostics=[str(e)])
        return CompileResult(accepted=True)
