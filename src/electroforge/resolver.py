"""
electroforge.resolver - Feature Closure
=======================================

Expands the user's selection into the full set of features the project
needs. Two sources add features:

1. Mandatory features from the registry (placed first, registry order).
2. Implication edges such as ``darkmode -> preload`` or ``script lint ->
   eslint`` (appended in the order they fire).

The expansion runs to a fixed point, so an implied feature that itself
triggers another edge is handled, and running it again on an already
closed selection changes nothing.

Example
-------
>>> from electroforge.models import Answers
>>> answers = Answers(app_name="demo", features=["darkmode"], scripts=["lint"])
>>> resolve_features(answers)
['Preload enabled automatically for dark mode.', 'ESLint feature added because lint script selected.']
>>> answers.features, answers.auto_preload
(['darkmode', 'preload', 'eslint'], True)
>>> resolve_features(answers)
[]
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from electroforge.presets import FEATURES, IMPLICATIONS, PRELOAD


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from electroforge.models import Answers
    from electroforge.presets import FeatureDefinition, Implication


def mandatory_features(
    registry: Mapping[str, FeatureDefinition] = FEATURES,
) -> list[str]:
    return [feature.id for feature in registry.values() if feature.mandatory]


def _is_triggered(edge: Implication, answers: Answers) -> bool:
    if edge.kind == "script":
        return answers.has_script(edge.trigger)
    return answers.has_feature(edge.trigger)


def resolve_features(
    answers: Answers,
    implications: Iterable[Implication] = IMPLICATIONS,
    registry: Mapping[str, FeatureDefinition] = FEATURES,
) -> list[str]:
    """
    Close ``answers.features`` over mandatory features and implications.

    The answers are mutated in place: missing features are inserted and
    ``auto_preload`` is set when ``preload`` had to be added.

    Parameters
    ----------
    answers : Answers
        Selection to expand.

    implications : Iterable[Implication]
        Edges to close over. Defaults to the built-in registry.

    registry : Mapping[str, FeatureDefinition]
        Feature registry used to find mandatory features.

    Returns
    -------
    list[str]
        Notices for every feature that was added by an implication, in the
        order they were added. Empty when the selection was already closed.
    """
    edges = list(implications)
    notices: list[str] = []

    missing = [f for f in mandatory_features(registry) if f not in answers.features]
    if missing:
        answers.features[:0] = missing

    changed = True
    while changed:
        changed = False
        for edge in edges:
            if answers.has_feature(edge.implies) or not _is_triggered(edge, answers):
                continue
            answers.features.append(edge.implies)
            if edge.implies == PRELOAD:
                answers.auto_preload = True
            if edge.message:
                notices.append(edge.message)
            changed = True

    return notices
