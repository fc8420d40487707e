"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def _validate_fraction(params: dict[str, Any], name: str) -> list[ValidationError]:
        if name not in params:
            return []
        value = params[name]
        if not _is_number(value) or value <= 0 or value > 1:
            return [ValidationError(
                field=name,
                message="Must be a positive number between 0 and 1",
                value=value
            )]
        return []

    @staticmethod
    def validate_plan_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate plan builder parameters."""
        errors = []
        errors.extend(ConfigValidator._validate_fraction(params, "keep_back_pct"))
        errors.extend(ConfigValidator._validate_fraction(params, "high_impact_ratio"))
        return errors

    @staticmethod
    def validate_pacing_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate pacing parameters."""
        return ConfigValidator._validate_fraction(params, "deviation_band_pct")

    @staticmethod
    def validate_advisory_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate advisory parameters."""
        errors = []

        if "impact_score_threshold" in params:
            value = params["impact_score_threshold"]
            if not isinstance(value, int) or isinstance(value, bool) or not 1 <= value <= 10:
                errors.append(ValidationError(
                    field="impact_score_threshold",
                    message="Must be an integer between 1 and 10",
                    value=value
                ))

        errors.extend(ConfigValidator._validate_fraction(params, "pace_band_pct"))
        return errors

    @staticmethod
    def validate_alert_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate alert parameters."""
        return ConfigValidator._validate_fraction(params, "cap_binding_share")

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "plan" in config:
            errors.extend(ConfigValidator.validate_plan_params(config["plan"]))

        if "pacing" in config:
            errors.extend(ConfigValidator.validate_pacing_params(config["pacing"]))

        if "advisory" in config:
            errors.extend(ConfigValidator.validate_advisory_params(config["advisory"]))

        if "alerts" in config:
            errors.extend(ConfigValidator.validate_alert_params(config["alerts"]))

        return errors
