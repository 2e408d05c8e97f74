"""Tests for dxlcomplete.engine.dynamic -- model and register resolvers."""

from __future__ import annotations

from conftest import AX_12A_REGISTERS, FakeToolRunner, reg_line

from dxlcomplete.engine.dynamic import (
    match_model,
    qualify_registers,
    resolve_models,
    resolve_registers,
)
from dxlcomplete.models import ResolvedModel, UnresolvedModel


class TestResolveModels:
    def test_returns_tool_lines(self, fake_runner) -> None:
        assert resolve_models(fake_runner) == ["AX-12A", "AX-18A", "MX-28"]

    def test_failure_is_empty(self) -> None:
        assert resolve_models(FakeToolRunner()) == []


class TestMatchModel:
    MODELS = ["AX-12A", "AX-18A", "MX-28"]

    def test_unique_prefix_resolves(self) -> None:
        match = match_model("MX", self.MODELS)
        assert match == ResolvedModel(identifier="MX-28")
        assert match.target == "MX-28"

    def test_full_name_resolves(self) -> None:
        assert match_model("AX-12A", self.MODELS).target == "AX-12A"

    def test_ambiguous_prefix_passes_through(self) -> None:
        match = match_model("AX-1", self.MODELS)
        assert match == UnresolvedModel(raw_prefix="AX-1")
        assert match.target == "AX-1"

    def test_no_match_passes_through(self) -> None:
        assert match_model("XL", self.MODELS).target == "XL"

    def test_empty_prefix_with_single_model_resolves(self) -> None:
        assert match_model("", ["MX-28"]).target == "MX-28"

    def test_empty_model_list(self) -> None:
        assert match_model("AX", []).kind == "unresolved"

    def test_prefix_match_is_case_sensitive(self) -> None:
        assert match_model("mx", self.MODELS).kind == "unresolved"

    def test_regex_characters_are_literal(self) -> None:
        assert match_model("A.", self.MODELS).kind == "unresolved"


class TestQualifyRegisters:
    def test_strips_leading_column(self) -> None:
        assert qualify_registers("AX-12A", AX_12A_REGISTERS[:2]) == [
            "AX-12A/model_number",
            "AX-12A/id",
        ]

    def test_wide_address_still_aligned(self) -> None:
        line = reg_line(116, 4, "RW", "goal_position")
        assert qualify_registers("XL430-W250", [line]) == ["XL430-W250/goal_position"]

    def test_short_lines_skipped(self) -> None:
        assert qualify_registers("AX-12A", ["   0 2 R  ", "junk"]) == []

    def test_custom_column_width(self) -> None:
        assert qualify_registers("M", ["xx name"], column_width=3) == ["M/name"]


class TestResolveRegisters:
    def test_full_spec_queries_model(self, fake_runner) -> None:
        result = resolve_registers("AX-12A/go", fake_runner)
        assert result == [
            "AX-12A/model_number",
            "AX-12A/id",
            "AX-12A/goal_position",
            "AX-12A/present_position",
        ]
        assert fake_runner.register_queries == ["AX-12A"]

    def test_unique_prefix_is_expanded(self, fake_runner) -> None:
        fake_runner.registers["MX-28"] = [reg_line(0, 2, "R", "model_number")]
        assert resolve_registers("MX", fake_runner) == ["MX-28/model_number"]
        assert fake_runner.register_queries == ["MX-28"]

    def test_ambiguous_prefix_falls_back_to_models(self, fake_runner) -> None:
        assert resolve_registers("AX-1", fake_runner) == ["AX-12A", "AX-18A", "MX-28"]
        assert fake_runner.register_queries == ["AX-1"]

    def test_model_without_registers_falls_back(self, fake_runner) -> None:
        assert resolve_registers("MX-28/", fake_runner) == ["AX-12A", "AX-18A", "MX-28"]

    def test_models_queried_once(self, fake_runner) -> None:
        resolve_registers("AX-18A/t", fake_runner)
        assert [call[0] for call in fake_runner.calls] == ["list-models", "list-registers"]

    def test_everything_failing_is_empty(self) -> None:
        assert resolve_registers("AX-12A/", FakeToolRunner()) == []

    def test_splits_on_first_separator(self, fake_runner) -> None:
        resolve_registers("AX-12A/a/b", fake_runner)
        assert fake_runner.register_queries == ["AX-12A"]
