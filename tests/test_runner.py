"""Tests for oracle invocation, assertion and case isolation."""

import pytest

from bindconf.compilers.base import CompileResult, CompilerError, get_compiler
from bindconf.compilers.naga import NagaCompiler
from bindconf.compilers.reference import ReferenceCompiler
from bindconf.matrix.scenarios import SCENARIOS, get_scenario
from bindconf.runner import (
    ExpectationMismatch, expect_compile_result, run_case, run_scenarios, synthesize_case,
)


class AlwaysAccept:
    name = "always-accept"

    def __init__(self):
        self.calls = 0

    def validate(self, source):
        self.calls += 1
        return CompileResult(accepted=True, diagnostics=["ok"])


class Broken:
    name = "broken"

    def validate(self, source):
        raise CompilerError("cannot start")


class TestExpectCompileResult:
    def test_agreement_returns_result(self):
        result = expect_compile_result(AlwaysAccept(), True, "var<private> a : i32;")
        assert result.accepted

    def test_mismatch_carries_source_and_verdicts(self):
        source = "@group(0) var<uniform> R : vec4<f32>;\n"
        with pytest.raises(ExpectationMismatch) as excinfo:
            expect_compile_result(ReferenceCompiler(), True, source)
        err = excinfo.value
        assert isinstance(err, AssertionError)
        assert err.expected is True
        assert err.actual is False
        assert err.source == source
        message = str(err)
        assert "expected compilation to succeed, but it was rejected" in message
        assert "   1: @group(0) var<uniform> R : vec4<f32>;" in message
        assert "requires @binding" in message

    def test_single_invocation(self):
        compiler = AlwaysAccept()
        with pytest.raises(ExpectationMismatch):
            expect_compile_result(compiler, False, "")
        assert compiler.calls == 1


class TestRunCase:
    def test_passing_case(self):
        scenario = get_scenario("private_module_scope")
        result = run_case(scenario, {}, ReferenceCompiler())
        assert result.passed
        assert result.expected is False
        assert result.actual is False
        assert "var<private> a" in result.source
        assert result.case_id == "private_module_scope:-"

    def test_mismatch_is_recorded(self):
        scenario = get_scenario("function_scope")
        result = run_case(scenario, {}, AlwaysAccept())
        assert not result.passed
        assert result.expected is False
        assert result.actual is True
        assert "Source:" in result.error

    def test_compiler_error_is_recorded(self):
        scenario = get_scenario("function_scope")
        result = run_case(scenario, {}, Broken())
        assert not result.passed
        assert result.actual is None
        assert "broken failed: cannot start" in result.error


class TestRunScenarios:
    def test_failures_do_not_stop_siblings(self):
        scenarios = [get_scenario("function_scope"), get_scenario("unreferenced_resource")]
        compiler = AlwaysAccept()
        results = run_scenarios(scenarios, compiler)
        assert compiler.calls == 1 + len(get_scenario("unreferenced_resource"))
        assert [r.passed for r in results].count(False) == 1
        assert results[0].scenario == "function_scope"

    def test_default_compiler_is_reference(self):
        results = run_scenarios([get_scenario("private_function_scope")])
        assert len(results) == 1
        assert results[0].passed

    def test_order_independence(self):
        scenarios = [get_scenario("binding_attributes"), get_scenario("different_entry_points")]
        ordered = run_scenarios(scenarios, ReferenceCompiler())
        shuffled = run_scenarios(scenarios, ReferenceCompiler(), seed=1234)
        assert [r.case_id for r in ordered] != [r.case_id for r in shuffled]

        def outcomes(results):
            return {r.case_id: (r.expected, r.actual, r.passed) for r in results}

        assert outcomes(ordered) == outcomes(shuffled)

    def test_all_scenarios_pass_against_reference(self):
        results = run_scenarios(SCENARIOS, ReferenceCompiler(), seed=7)
        failed = [r.case_id for r in results if not r.passed]
        assert failed == []


class TestSynthesizeCase:
    def test_concrete_rejection(self):
        scenario = get_scenario("single_entry_point")
        params = {
            "stage": "compute",
            "a_kind": scenario.params.domain("a_kind")[0],
            "b_kind": scenario.params.domain("b_kind")[0],
            "a_group": 0, "b_group": 0, "a_binding": 0, "b_binding": 0,
            "usage": "direct",
        }
        source, verdict = synthesize_case(scenario, params)
        assert "var<uniform> resource_a" in source
        assert "var<storage> resource_b" in source
        assert not verdict.accepted


class TestGetCompiler:
    def test_reference(self):
        assert isinstance(get_compiler("reference"), ReferenceCompiler)

    def test_naga_path(self):
        compiler = get_compiler("naga", naga_path="/opt/naga/bin/naga")
        assert isinstance(compiler, NagaCompiler)
        assert compiler.executable == "/opt/naga/bin/naga"

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown compiler"):
            get_compiler("tint")

    def test_missing_naga_raises_compiler_error(self):
        compiler = NagaCompiler("definitely-not-a-real-naga-binary")
        assert not compiler.available()
        with pytest.raises(CompilerError, match="not found"):
            compiler.validate("var<private> a : i32;")
