"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    AdvisoryParams,
    AlertParams,
    DefaultConfig,
    PacingParams,
    PlanParams,
    get_default_config,
)
from .validation import ConfigValidator

SECTION_TYPES = {
    "plan": PlanParams,
    "pacing": PacingParams,
    "advisory": AdvisoryParams,
    "alerts": AlertParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_symbol_config(self, symbol: str) -> dict[str, Any]:
        """Load symbol-specific configuration overrides."""
        symbols_file = self.config_dir / "symbols.yaml"

        if not symbol or not symbols_file.exists():
            return {}

        try:
            with open(symbols_file) as f:
                symbols_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse {symbols_file.name}: {e}",
                source=str(symbols_file)
            ) from e

        if not isinstance(symbols_config, dict):
            raise ConfigurationError(
                f"{symbols_file.name} must contain a mapping",
                source=str(symbols_file)
            )

        return symbols_config.get("symbols", {}).get(symbol, {}) or {}

    def merge_config(
        self,
        symbol: str,
        order_overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-order overrides (highest priority)
        2. Symbol-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        symbol_config = self.load_symbol_config(symbol)
        config = self._deep_merge(config, symbol_config)

        if order_overrides:
            config = self._deep_merge(config, order_overrides)

        return config

    def load(
        self,
        symbol: str,
        order_overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """Merge, validate and materialize the configuration for a symbol."""
        merged = self.merge_config(symbol, order_overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise ConfigurationError(
                f"Invalid configuration for {symbol or 'default'}: " + "; ".join(error_msgs),
                source=str(self.config_dir),
                errors=errors
            )

        return build_config(merged)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def build_config(merged: dict[str, Any]) -> DefaultConfig:
    """Turn a merged configuration dict back into frozen dataclasses.

    Unknown sections and keys are ignored.
    """
    sections = {}
    for name, params_type in SECTION_TYPES.items():
        known = {f.name for f in fields(params_type)}
        values = {k: v for k, v in (merged.get(name) or {}).items() if k in known}
        sections[name] = params_type(**values)
    return DefaultConfig(**sections)
