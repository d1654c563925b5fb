"""Tests for parameter spaces and scenario declarations."""

import pytest

from bindconf.matrix.params import ParamSpace, format_params
from bindconf.matrix.scenarios import SCENARIOS, get_scenario, iter_cases
from bindconf.program.kinds import KINDS_A, KINDS_B, KINDS_ALL, ResourceKind
from bindconf.program.model import Program


class TestParamSpace:
    def test_empty_space_yields_one_case(self):
        space = ParamSpace()
        assert len(space) == 1
        assert list(space) == [{}]

    def test_cartesian_product(self):
        space = ParamSpace().combine("a", [1, 2]).combine("b", ["x", "y", "z"])
        cases = list(space)
        assert len(space) == 6
        assert len(cases) == 6
        assert {"a": 2, "b": "y"} in cases
        assert len({(c["a"], c["b"]) for c in cases}) == 6

    def test_iteration_restarts(self):
        space = ParamSpace().combine("stage", ["vertex", "fragment"])
        assert list(space) == list(space)

    def test_combine_is_immutable(self):
        base = ParamSpace().combine("a", [1])
        extended = base.combine("b", [True, False])
        assert base.names == ("a",)
        assert extended.names == ("a", "b")

    def test_duplicate_name(self):
        with pytest.raises(ValueError, match="Duplicate"):
            ParamSpace().combine("a", [1]).combine("a", [2])

    def test_empty_domain(self):
        with pytest.raises(ValueError, match="no values"):
            ParamSpace().combine("a", [])

    def test_domain_lookup(self):
        space = ParamSpace().combine("usage", ("direct", "transitive"))
        assert space.domain("usage") == ("direct", "transitive")
        with pytest.raises(KeyError):
            space.domain("stage")

    def test_generator_values_are_materialized(self):
        space = ParamSpace().combine("n", (i for i in range(3)))
        assert list(space) == list(space)
        assert len(space) == 3


class TestFormatParams:
    def test_format(self):
        params = {"stage": "vertex", "resource": ResourceKind.TEXTURE_2D, "has_group": True}
        assert format_params(params) == "stage=vertex;resource=texture_2d;has_group=True"

    def test_empty(self):
        assert format_params({}) == "-"


class TestScenarios:
    def test_names_are_unique(self):
        names = [s.name for s in SCENARIOS]
        assert len(names) == len(set(names))

    def test_get_scenario(self):
        assert get_scenario("single_entry_point").name == "single_entry_point"
        with pytest.raises(KeyError):
            get_scenario("nope")

    def test_binding_attributes_domain(self):
        params = get_scenario("binding_attributes").params
        assert params.domain("resource") == KINDS_ALL
        assert len(params) == 3 * 2 * 2 * len(KINDS_ALL)

    def test_single_entry_point_domain(self):
        params = get_scenario("single_entry_point").params
        assert params.domain("a_kind") == KINDS_A
        assert params.domain("b_kind") == KINDS_B
        for axis in ("a_group", "b_group", "a_binding", "b_binding"):
            assert params.domain(axis) == (0, 3)
        assert len(params) == 3 * len(KINDS_A) * len(KINDS_B) * 16 * 2

    def test_different_entry_points_domain(self):
        params = get_scenario("different_entry_points").params
        assert len(params) == 9 * len(KINDS_A) * len(KINDS_B) * 2

    def test_scope_scenarios_have_one_case(self):
        for name in ("private_module_scope", "private_function_scope",
                     "function_scope", "function_scope_texture"):
            assert len(get_scenario(name)) == 1

    def test_every_case_builds_a_program(self):
        for scenario, params in iter_cases():
            assert isinstance(scenario.build(params), Program)

    def test_iter_cases_counts(self):
        total = sum(len(s) for s in SCENARIOS)
        assert sum(1 for _ in iter_cases()) == total
        assert sum(1 for _ in iter_cases([get_scenario("function_scope")])) == 1

    def test_kind_classes_are_fixed_subsets(self):
        assert set(KINDS_A) <= set(KINDS_ALL)
        assert set(KINDS_B) <= set(KINDS_ALL)
        assert not set(KINDS_A) & set(KINDS_B)
