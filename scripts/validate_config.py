#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pacer_app.config.loader import ConfigLoader
from pacer_app.config.validation import ConfigValidator, ValidationError
from pacer_app.errors import ConfigurationError


def configured_symbols(loader: ConfigLoader) -> List[str]:
    """Symbols listed in symbols.yaml."""
    symbols_file = loader.config_dir / "symbols.yaml"
    if not symbols_file.exists():
        return []
    with open(symbols_file) as f:
        data = yaml.safe_load(f) or {}
    return sorted((data.get("symbols") or {}).keys())


def validate_symbol_config(loader: ConfigLoader, symbol: str) -> List[ValidationError]:
    """Validate the merged configuration for a specific symbol."""
    config = loader.merge_config(symbol)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("🔍 Validating execution pacer configuration...")

    loader = ConfigLoader.create()

    try:
        symbols = configured_symbols(loader) + ["UNKNOWN"]  # UNKNOWN uses defaults
    except yaml.YAMLError as e:
        print(f"❌ Cannot parse symbols.yaml: {e}")
        sys.exit(1)

    all_valid = True

    for symbol in symbols:
        print(f"\n📊 Validating {symbol}...")

        try:
            errors = validate_symbol_config(loader, symbol)

            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
            else:
                print(f"✅ {symbol} configuration is valid")

        except ConfigurationError as e:
            print(f"❌ Error validating {symbol}: {e}")
            all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
