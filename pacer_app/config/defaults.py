"""Default configuration parameters for the execution planner."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PlanParams:
    """Plan builder parameters."""
    keep_back_pct: float = 0.05         # Deferred-completion buffer, share of continuous target
    high_impact_ratio: float = 0.25     # Row flagged when suggested > ratio * slice volume


@dataclass(frozen=True)
class PacingParams:
    """Pacing classification parameters."""
    deviation_band_pct: float = 0.05    # AHEAD / BEHIND band around the plan


@dataclass(frozen=True)
class AdvisoryParams:
    """Next-action heuristics."""
    impact_score_threshold: int = 8     # Score at or above which clips should shrink
    pace_band_pct: float = 0.10         # Deviation that triggers a pace correction


@dataclass(frozen=True)
class AlertParams:
    """Alert thresholds."""
    cap_binding_share: float = 0.3      # Share of rows at cap that raises a warning


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    plan: PlanParams
    pacing: PacingParams
    advisory: AdvisoryParams
    alerts: AlertParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        plan=PlanParams(),
        pacing=PacingParams(),
        advisory=AdvisoryParams(),
        alerts=AlertParams(),
    )
