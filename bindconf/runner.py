"""Run scenarios against a compiler and compare with the oracle's verdict."""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Iterable, Optional

from bindconf.analysis.oracle import Verdict, expected_verdict
from bindconf.compilers.base import Compiler, CompileResult, CompilerError
from bindconf.matrix.params import format_params
from bindconf.matrix.scenarios import SCENARIOS, Scenario, iter_cases
from bindconf.program.synthesizer import render_program


class ExpectationMismatch(AssertionError):
    def __init__(self, source: str, expected: bool, result: CompileResult):
        self.source = source
        self.expected = expected
        self.actual = result.accepted
        self.diagnostics = list(result.diagnostics)
        diag = "\n".join(self.diagnostics) or "(no diagnostics)"
        super().__init__(
            f"expected compilation to {_outcome(expected)}, but it {_outcome(result.accepted, past=True)}\n"
            f"Diagnostics:\n{diag}\n\nSource:\n{_numbered(source)}"
        )


@dataclass
class CaseResult:
    scenario: str
    params: dict
    expected: bool
    actual: Optional[bool]
    source: str
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.error is None

    @property
    def case_id(self) -> str:
        return f"{self.scenario}:{format_params(self.params)}"


def synthesize_case(scenario: Scenario, params: dict) -> tuple[str, Verdict]:
    """Build one case's program; return its source and the expected verdict."""
    program = scenario.build(params)
    return render_program(program), expected_verdict(program)


def expect_compile_result(compiler: Compiler, expected: bool, source: str) -> CompileResult:
    """Compile once and raise ExpectationMismatch if the outcome disagrees."""
    result = compiler.validate(source)
    if result.accepted != expected:
        raise ExpectationMismatch(source, expected, result)
    return result


def run_case(scenario: Scenario, params: dict, compiler: Compiler) -> CaseResult:
    source, verdict = synthesize_case(scenario, params)
    case = CaseResult(scenario.name, dict(params), verdict.accepted, None, source)
    try:
        result = expect_compile_result(compiler, verdict.accepted, source)
    except ExpectationMismatch as e:
        case.actual = e.actual
        case.error = str(e)
        return case
    except CompilerError as e:
        case.error = f"{compiler.name} failed: {e}"
        return case
    case.actual = result.accepted
    return case


def run_scenarios(
    scenarios: Iterable[Scenario] = SCENARIOS,
    compiler: Compiler | None = None,
    seed: int | None = None,
) -> list[CaseResult]:
    """Run every case of ``scenarios``; failures do not stop sibling cases.

    With ``seed`` the execution order is shuffled deterministically.
    """
    if compiler is None:
        from bindconf.compilers.reference import ReferenceCompiler
        compiler = ReferenceCompiler()

    cases = list(iter_cases(scenarios))
    if seed is not None:
        random.Random(seed).shuffle(cases)
    return [run_case(scenario, params, compiler) for scenario, params in cases]


def _outcome(accepted: bool, past: bool = False) -> str:
    if past:
        return "was accepted" if accepted else "was rejected"
    return "succeed" if accepted else "fail"


def _numbered(text: str) -> str:
    lines = text.split("\n")
    return "\n".join(f"{i+1:4d}: {line}" for i, line in enumerate(lines))
