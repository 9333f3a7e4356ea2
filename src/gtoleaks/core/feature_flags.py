"""Analysis policy flags.

Some analysis policies are still unsettled (what an unset GTO frequency
means, whether lines start at the root action, whether float lookahead runs).
Each one is a named flag in :data:`KNOWN_FLAGS`, switched on through the
``GTOLEAKS_FEATURES`` environment variable (comma-separated, case-insensitive)
or temporarily in tests::

    with feature_flags.override(enable={feature_flags.UNSET_AS_ZERO}):
        config = AnalysisConfig.from_flags()

Unknown names in the environment are logged and ignored; unknown names passed
in code raise ``ValueError``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from contextlib import contextmanager
from typing import Final

__all__ = ["ENV_VAR", "HIDE_ROOT", "KNOWN_FLAGS", "NO_FLOATS", "UNSET_AS_ZERO", "enabled_flags", "is_enabled", "override"]

logger = logging.getLogger(__name__)

ENV_VAR: Final = "GTOLEAKS_FEATURES"

UNSET_AS_ZERO: Final = "profiles.unset_as_zero"
HIDE_ROOT: Final = "lines.hide_root"
NO_FLOATS: Final = "leaks.no_floats"

KNOWN_FLAGS: Final[dict[str, str]] = {
    UNSET_AS_ZERO: "nodes missing from the GTO profile count as never taken",
    HIDE_ROOT: "lines omit the root action",
    NO_FLOATS: "skip float opportunity lookahead",
}

_OVERRIDES: list[tuple[frozenset[str], frozenset[str]]] = []


def _known(flags: Iterable[str]) -> frozenset[str]:
    names = frozenset(flag.strip().lower() for flag in flags)
    unknown = names - KNOWN_FLAGS.keys()
    if unknown:
        raise ValueError(f"unknown feature flag(s): {', '.join(sorted(unknown))}")
    return names


def _from_env() -> set[str]:
    raw = os.getenv(ENV_VAR, "")
    names = {entry.strip().lower() for entry in raw.split(",") if entry.strip()}
    unknown = names - KNOWN_FLAGS.keys()
    if unknown:
        logger.warning("ignoring unknown feature flags", extra={"flags": sorted(unknown)})
    return names & KNOWN_FLAGS.keys()


def enabled_flags() -> frozenset[str]:
    """Return the known flags in effect: the environment, then overrides in order."""

    active = _from_env()
    for enable, disable in _OVERRIDES:
        active -= disable
        active |= enable
    return frozenset(active)


def is_enabled(flag: str) -> bool:
    (name,) = _known([flag])
    return name in enabled_flags()


@contextmanager
def override(*, enable: Iterable[str] = (), disable: Iterable[str] = ()):
    """Enable or disable flags for the duration of the block; nests."""

    _OVERRIDES.append((_known(enable), _known(disable)))
    try:
        yield
    finally:
        _OVERRIDES.pop()
