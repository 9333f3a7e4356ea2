"""One-call analysis of a spot: resolve profiles, then scan for leaks and exploits."""

from __future__ import annotations

import logging

from ..core.config import AnalysisConfig
from ..core.models import AnalysisResult, AnnotatedNode, ProfilePair, Spot
from .exploits import find_exploits
from .leaks import find_leaks
from .resolver import resolve_tree
from .validation import validate_profiles, validate_tree

__all__ = ["analyze_spot", "annotate_spot"]

logger = logging.getLogger(__name__)


def annotate_spot(
    spot: Spot,
    gto_profiles: ProfilePair,
    active_profiles: ProfilePair | None = None,
    config: AnalysisConfig | None = None,
) -> AnnotatedNode:
    config = config or AnalysisConfig()
    if config.validate:
        validate_tree(spot.tree)
        validate_profiles(gto_profiles, active_profiles)
    return resolve_tree(spot.tree, gto_profiles, active_profiles, unset_frequency=config.unset_frequency)


def analyze_spot(
    spot: Spot,
    gto_profiles: ProfilePair,
    active_profiles: ProfilePair | None = None,
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Compare ``active_profiles`` against ``gto_profiles`` over ``spot``'s tree.

    Raises :class:`~gtoleaks.core.errors.AnalysisError` subclasses for malformed
    input when validation is enabled; nothing is returned for a partial tree.
    """

    config = config or AnalysisConfig()
    tree = annotate_spot(spot, gto_profiles, active_profiles, config)
    line_state = {
        "pot_size": spot.pot_size,
        "oop_combos": spot.oop_combos,
        "ip_combos": spot.ip_combos,
        "hide_root_from_line": config.hide_root_from_line,
    }
    leaks = find_leaks(tree, include_floats=config.include_floats, **line_state)
    exploits = find_exploits(tree, **line_state)
    logger.debug(
        "spot analysed",
        extra={"spot_id": spot.id, "leaks": len(leaks), "exploits": len(exploits)},
    )
    return AnalysisResult(leaks=tuple(leaks), exploits=tuple(exploits))
