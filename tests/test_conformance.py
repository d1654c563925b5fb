"""Run every declared scenario case against the available compilers."""

import shutil

import pytest

from bindconf.compilers.naga import NagaCompiler
from bindconf.compilers.reference import ReferenceCompiler
from bindconf.matrix.params import format_params
from bindconf.matrix.scenarios import iter_cases, get_scenario
from bindconf.analysis.oracle import expected_verdict
from bindconf.program.kinds import ResourceKind
from bindconf.program.model import (
    Program, ResourceDeclaration, LocalVariable, Function, EntryPoint, Use, Call,
)
from bindconf.program.synthesizer import render_program
from bindconf.runner import expect_compile_result, synthesize_case

CASES = list(iter_cases())


def _has_naga() -> bool:
    return shutil.which("naga") is not None


requires_naga = pytest.mark.skipif(not _has_naga(), reason="naga not found on PATH")


@pytest.mark.parametrize(
    "scenario,params", CASES,
    ids=[f"{s.name}:{format_params(p)}" for s, p in CASES],
)
def test_reference_compiler(scenario, params):
    source, verdict = synthesize_case(scenario, params)
    expect_compile_result(ReferenceCompiler(), verdict.accepted, source)


class TestDirectTransitiveEquivalence:
    """Direct and transitive renderings of a configuration get the same outcome."""

    @pytest.mark.parametrize("name", ["single_entry_point", "different_entry_points", "unreferenced_resource"])
    def test_equivalence(self, name):
        scenario = get_scenario(name)
        compiler = ReferenceCompiler()
        for params in scenario.params:
            if params["usage"] != "direct":
                continue
            direct_src, _ = synthesize_case(scenario, params)
            transitive_src, _ = synthesize_case(scenario, {**params, "usage": "transitive"})
            assert direct_src != transitive_src
            assert compiler.validate(direct_src).accepted == compiler.validate(transitive_src).accepted



def _shadowed_resource():
    return Program(
        resources=[
            ResourceDeclaration("resource_a", ResourceKind.UNIFORM, 0, 0),
            ResourceDeclaration("resource_b", ResourceKind.STORAGE, 0, 0),
        ],
        entry_points=[EntryPoint(
            "main",
            [LocalVariable("resource_b", "i32"), Use("resource_a"), Use("resource_b")],
            stage="compute",
        )],
    )


def _recursive_helper():
    return Program(
        resources=[ResourceDeclaration("R", ResourceKind.UNIFORM, 0, 0)],
        functions=[Function("f", [Use("R"), Call("f")])],
        entry_points=[EntryPoint("main", [Call("f")], stage="compute")],
    )


def _local_texture():
    return Program(entry_points=[EntryPoint(
        "main", [LocalVariable("a", "texture_2d<f32>")], stage="compute",
    )])


def _local_private():
    return Program(entry_points=[EntryPoint(
        "main", [LocalVariable("a", "i32", address_space="private")], stage="compute",
    )])


class TestOracleAgreesWithReference:
    """Hand-built programs outside the scenario matrix get the same outcome from both."""

    @pytest.mark.parametrize("build,accepted", [
        (_shadowed_resource, True),
        (_recursive_helper, False),
        (_local_texture, False),
        (_local_private, False),
    ], ids=["shadowed_resource", "recursive_helper", "local_texture", "local_private"])
    def test_agreement(self, build, accepted):
        program = build()
        source = render_program(program)
        assert expected_verdict(program).accepted == accepted
        expect_compile_result(ReferenceCompiler(), accepted, source)

@requires_naga
class TestNaga:
    def test_collision_in_one_entry_point(self):
        scenario = get_scenario("single_entry_point")
        params = {
            "stage": "compute", "a_kind": scenario.params.domain("a_kind")[0],
            "b_kind": scenario.params.domain("b_kind")[0],
            "a_group": 0, "b_group": 0, "a_binding": 0, "b_binding": 0,
            "usage": "direct",
        }
        source, verdict = synthesize_case(scenario, params)
        assert not verdict.accepted
        expect_compile_result(NagaCompiler(), verdict.accepted, source)

    def test_reuse_across_entry_points(self):
        scenario = get_scenario("different_entry_points")
        params = {
            "a_stage": "vertex", "b_stage": "fragment",
            "a_kind": scenario.params.domain("a_kind")[0],
            "b_kind": scenario.params.domain("b_kind")[0],
            "usage": "direct",
        }
        source, verdict = synthesize_case(scenario, params)
        assert verdict.accepted
        expect_compile_result(NagaCompiler(), verdict.accepted, source)
