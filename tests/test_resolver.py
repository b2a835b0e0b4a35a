"""
Tests for electroforge.resolver
===============================

Covers the implied-feature closure: automatic preload, ESLint and Prettier,
mandatory features, idempotence and chained implications.
"""

import pytest

from electroforge.presets import FeatureDefinition, Implication
from electroforge.resolver import mandatory_features, resolve_features


# =============================================================================
# Preload Implications
# =============================================================================

class TestPreloadImplication:
    """darkmode and frameless both need the preload bridge."""

    @pytest.mark.parametrize("feature", ["darkmode", "frameless"])
    def test_adds_preload(self, make_answers, feature: str) -> None:
        answers = make_answers(features=[feature])

        notices = resolve_features(answers)

        assert answers.features == [feature, "preload"]
        assert answers.auto_preload is True
        assert len(notices) == 1
        assert "Preload enabled automatically" in notices[0]

    def test_preload_added_once_for_both(self, make_answers) -> None:
        answers = make_answers(features=["frameless", "darkmode"])

        notices = resolve_features(answers)

        assert answers.features.count("preload") == 1
        assert notices == ["Preload enabled automatically for frameless windows."]

    def test_explicit_preload_not_flagged(self, make_answers) -> None:
        """If the user picked preload, it was not automatic."""
        answers = make_answers(features=["preload", "darkmode"])

        notices = resolve_features(answers)

        assert answers.features == ["preload", "darkmode"]
        assert answers.auto_preload is False
        assert notices == []

    def test_no_trigger_no_preload(self, make_answers) -> None:
        answers = make_answers(features=["sqlite"])

        resolve_features(answers)

        assert "preload" not in answers.features
        assert answers.auto_preload is False

    def test_idempotent(self, make_answers) -> None:
        answers = make_answers(features=["darkmode"])

        resolve_features(answers)
        second = resolve_features(answers)

        assert answers.features == ["darkmode", "preload"]
        assert answers.auto_preload is True
        assert second == []


# =============================================================================
# Script Implications
# =============================================================================

class TestScriptImplication:
    """lint and format scripts pull in their tooling features."""

    def test_lint_adds_eslint(self, make_answers) -> None:
        answers = make_answers(scripts=["lint"])

        notices = resolve_features(answers)

        assert answers.features == ["eslint"]
        assert notices == ["ESLint feature added because lint script selected."]

    def test_format_adds_prettier(self, make_answers) -> None:
        answers = make_answers(scripts=["format"])

        resolve_features(answers)

        assert answers.features == ["prettier"]

    def test_added_exactly_once_over_two_runs(self, make_answers) -> None:
        answers = make_answers(scripts=["lint", "format"])

        resolve_features(answers)
        resolve_features(answers)

        assert answers.features.count("eslint") == 1
        assert answers.features.count("prettier") == 1

    def test_existing_feature_untouched(self, make_answers) -> None:
        answers = make_answers(features=["eslint"], scripts=["lint"])

        assert resolve_features(answers) == []
        assert answers.features == ["eslint"]

    def test_script_edge_ignores_feature_with_same_name(self, make_answers) -> None:
        """A script edge only fires on scripts."""
        answers = make_answers(features=["lint"])

        resolve_features(answers)

        assert "eslint" not in answers.features

    def test_notice_order(self, make_answers) -> None:
        answers = make_answers(features=["darkmode"], scripts=["format", "lint"])

        notices = resolve_features(answers)

        assert notices == [
            "Preload enabled automatically for dark mode.",
            "ESLint feature added because lint script selected.",
            "Prettier feature added because format script selected.",
        ]
        assert answers.features == ["darkmode", "preload", "eslint", "prettier"]


# =============================================================================
# Closure Mechanics
# =============================================================================

class TestClosure:
    """Tests with custom registries and edges."""

    def test_chained_implications(self, make_answers) -> None:
        """An implied feature can trigger further edges."""
        edges = [
            Implication(trigger="b", implies="c"),
            Implication(trigger="a", implies="b"),
        ]
        answers = make_answers(features=["a"])

        resolve_features(answers, implications=edges)

        assert answers.features == ["a", "b", "c"]

    def test_cycle_terminates(self, make_answers) -> None:
        edges = [
            Implication(trigger="a", implies="b"),
            Implication(trigger="b", implies="a"),
        ]
        answers = make_answers(features=["b"])

        resolve_features(answers, implications=edges)

        assert answers.features == ["b", "a"]

    def test_mandatory_features_first(self, make_answers) -> None:
        registry = {
            "core": FeatureDefinition(id="core", title="Core", mandatory=True),
            "extra": FeatureDefinition(id="extra", title="Extra"),
        }
        answers = make_answers(features=["extra"])

        resolve_features(answers, implications=[], registry=registry)

        assert answers.features == ["core", "extra"]

    def test_mandatory_not_duplicated(self, make_answers) -> None:
        registry = {"core": FeatureDefinition(id="core", title="Core", mandatory=True)}
        answers = make_answers(features=["core"])

        resolve_features(answers, implications=[], registry=registry)
        resolve_features(answers, implications=[], registry=registry)

        assert answers.features == ["core"]

    def test_builtin_registry_has_no_mandatory_features(self) -> None:
        assert mandatory_features() == []

    def test_message_optional(self, make_answers) -> None:
        answers = make_answers(features=["a"])

        notices = resolve_features(
            answers, implications=[Implication(trigger="a", implies="b")]
        )

        assert answers.features == ["a", "b"]
        assert notices == []
