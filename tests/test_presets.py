"""
Tests for electroforge.presets
==============================

Registry sanity checks: identifiers, implications and definition objects.
"""

from electroforge.presets import FEATURES, IMPLICATIONS, SCRIPTS


class TestRegistry:
    """Tests for the built-in feature and script registries."""

    def test_keys_match_ids(self) -> None:
        assert all(key == feature.id for key, feature in FEATURES.items())
        assert all(key == script.id for key, script in SCRIPTS.items())

    def test_implications_point_at_registered_features(self) -> None:
        for edge in IMPLICATIONS:
            assert edge.implies in FEATURES
            registry = FEATURES if edge.kind == "feature" else SCRIPTS
            assert edge.trigger in registry

    def test_definitions_are_hashable(self) -> None:
        """Definitions with package maps can still be used in sets and as keys."""
        definitions = {*FEATURES.values(), *SCRIPTS.values()}

        assert len(definitions) == len(FEATURES) + len(SCRIPTS)
        assert FEATURES["sqlite"] in definitions
