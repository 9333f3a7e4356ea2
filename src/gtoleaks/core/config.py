from __future__ import annotations

from dataclasses import dataclass

from . import feature_flags

__all__ = ["AnalysisConfig", "DEFAULT_UNSET_FREQUENCY"]

# An action with no GTO entry is treated as always taken.
DEFAULT_UNSET_FREQUENCY = 1.0


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Policy knobs for one analysis run."""

    unset_frequency: float = DEFAULT_UNSET_FREQUENCY
    hide_root_from_line: bool = False
    include_floats: bool = True
    validate: bool = True

    @classmethod
    def from_flags(cls, *, hide_root_from_line: bool | None = None) -> AnalysisConfig:
        """Build a config from the active feature flags.

        An explicit ``hide_root_from_line`` wins over the ``lines.hide_root`` flag.
        """

        flags = feature_flags.enabled_flags()
        hide_root = hide_root_from_line
        if hide_root is None:
            hide_root = feature_flags.HIDE_ROOT in flags
        return cls(
            unset_frequency=0.0 if feature_flags.UNSET_AS_ZERO in flags else DEFAULT_UNSET_FREQUENCY,
            hide_root_from_line=hide_root,
            include_floats=feature_flags.NO_FLOATS not in flags,
        )
