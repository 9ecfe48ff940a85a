"""
Configuration dataclass for seating simulation parameters.

A configuration pairs an occupancy threshold with a visibility mode and is
fixed for the duration of a run.
"""

from dataclasses import dataclass, asdict, replace
from typing import Any, Optional


# Visibility modes
IMMEDIATE = "immediate"
FIRST_VISIBLE = "first_visible"

VISIBILITY_MODES = (IMMEDIATE, FIRST_VISIBLE)


@dataclass(frozen=True)
class Config:
    """
    Rule configuration for a seating simulation.

    Attributes:
        threshold: Occupied-neighbor count at which an occupied seat empties

        # Neighborhood
        visibility: "immediate" (8 adjacent cells) or "first_visible"
            (first seat seen in each compass direction)
        sight_range: Maximum marching distance in first_visible mode
            (None = as far as the grid extends)

        # Run limits
        max_iterations: Give up with NonConvergence after this many
            generations (None = trust convergence)
    """

    threshold: int = 4

    # Neighborhood
    visibility: str = IMMEDIATE
    sight_range: Optional[int] = None

    # Run limits
    max_iterations: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        self._validate()

    def _validate(self) -> None:
        """Check that all parameters are in valid ranges."""
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, int):
            raise ValueError(f"threshold must be an integer, got {self.threshold!r}")

        if self.threshold < 1:
            raise ValueError(f"threshold must be >= 1, got {self.threshold}")

        if self.visibility not in VISIBILITY_MODES:
            raise ValueError(
                f"visibility must be one of {VISIBILITY_MODES}, got {self.visibility!r}"
            )

        if self.sight_range is not None and self.sight_range < 1:
            raise ValueError(f"sight_range must be >= 1, got {self.sight_range}")

        if self.max_iterations is not None and self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")

    @classmethod
    def immediate(cls, **overrides: Any) -> "Config":
        """Adjacent-seat rule: empty at 4 occupied neighbors."""
        return cls(threshold=4, visibility=IMMEDIATE, **overrides)

    @classmethod
    def first_visible(cls, **overrides: Any) -> "Config":
        """Line-of-sight rule: empty at 5 occupied seats in view."""
        return cls(threshold=5, visibility=FIRST_VISIBLE, **overrides)

    @classmethod
    def preset(cls, name: str) -> "Config":
        """Look up a named preset ("immediate" or "first_visible")."""
        try:
            return PRESETS[name.replace("-", "_")]
        except KeyError:
            raise ValueError(
                f"unknown preset {name!r}, expected one of {sorted(PRESETS)}"
            ) from None

    def with_overrides(self, **changes: Any) -> "Config":
        """Return a copy with the given non-None fields replaced."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Config":
        """Create config from dictionary."""
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        return cls(**{k: v for k, v in d.items() if k in known_fields})

    @classmethod
    def from_args(cls, args: Any) -> "Config":
        """
        Create config from argparse namespace.

        Starts from the preset named by ``args.rule`` (if present) and applies
        any explicitly given field values on top.
        """
        rule = getattr(args, "rule", None)
        base = cls.preset(rule) if rule else cls()

        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        overrides = {k: v for k, v in vars(args).items() if k in known_fields}
        return base.with_overrides(**overrides)

    def __repr__(self) -> str:
        return (
            f"Config(threshold={self.threshold}, visibility={self.visibility!r}, "
            f"sight_range={self.sight_range}, max_iterations={self.max_iterations})"
        )


PRESETS: dict[str, Config] = {
    IMMEDIATE: Config.immediate(),
    FIRST_VISIBLE: Config.first_visible(),
}
