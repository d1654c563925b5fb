"""Directed call graph with exact transitive reachability."""

from __future__ import annotations


class CallGraph:
    """Functions as nodes, with call edges and variable-use edges.

    Callees that were never added as functions are kept as leaves: they are
    reported as reachable but contribute no further edges.
    """

    def __init__(self):
        self._calls: dict[str, set[str]] = {}
        self._uses: dict[str, set[str]] = {}

    @classmethod
    def from_functions(cls, functions) -> CallGraph:
        """Build a graph from objects exposing ``name``, ``calls`` and ``uses``."""
        graph = cls()
        for fn in functions:
            graph.add_function(fn.name)
            for callee in fn.calls:
                graph.add_call(fn.name, callee)
            for var in fn.uses:
                graph.add_use(fn.name, var)
        return graph

    @property
    def functions(self) -> set[str]:
        return set(self._calls)

    def add_function(self, name: str) -> None:
        self._calls.setdefault(name, set())
        self._uses.setdefault(name, set())

    def add_call(self, caller: str, callee: str) -> None:
        self.add_function(caller)
        self._calls[caller].add(callee)

    def add_use(self, function: str, variable: str) -> None:
        self.add_function(function)
        self._uses[function].add(variable)

    def callees(self, name: str) -> set[str]:
        return set(self._calls.get(name, ()))

    def uses(self, name: str) -> set[str]:
        return set(self._uses.get(name, ()))

    def reachable_functions(self, entry: str) -> set[str]:
        """All functions reachable from ``entry``, including ``entry`` itself."""
        seen = {entry}
        stack = [entry]
        while stack:
            current = stack.pop()
            for callee in self._calls.get(current, ()):
                if callee not in seen:
                    seen.add(callee)
                    stack.append(callee)
        return seen

    def reachable_variables(self, entry: str) -> set[str]:
        """Variables referenced by ``entry`` or anything it calls, transitively."""
        result: set[str] = set()
        for fn in self.reachable_functions(entry):
            result |= self._uses.get(fn, set())
        return result

    def is_recursive(self, name: str) -> bool:
        """True if ``name`` can reach itself through one or more calls."""
        for callee in self._calls.get(name, ()):
            if name in self.reachable_functions(callee):
                return True
        return False
