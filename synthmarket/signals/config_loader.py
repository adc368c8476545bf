"""
YAML configuration loader for signal profiles.

Loads signal configurations from YAML files, allowing rule thresholds, caps and
reasons to be tuned without code changes. Values left out of a file inherit
from the preset named by its `base` key (default: preview).
"""
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
from dataclasses import fields, replace

from .config import RuleConfig, SignalConfig, PRESET_CONFIGS
from ..shared.types import StrategyType

RULE_FIELDS = tuple(f.name for f in fields(RuleConfig))


def _parse_strategy_key(key: str) -> StrategyType:
    """Strict strategy lookup for config files (typos must not silently map to swing)."""
    tag = str(key).strip().lower().replace("_", "-")
    for member in StrategyType:
        if member.value == tag:
            return member
    valid = ", ".join(s.value for s in StrategyType)
    raise ValueError(f"Unknown strategy in rules: {key!r}. Valid: {valid}")


def _merge_rule(base: RuleConfig, overrides: Dict[str, Any], strategy: StrategyType) -> RuleConfig:
    if not isinstance(overrides, dict):
        raise ValueError(f"Rules for '{strategy.value}' must be a mapping")
    unknown = sorted(set(overrides) - set(RULE_FIELDS))
    if unknown:
        raise ValueError(f"Unknown rule setting(s) for '{strategy.value}': {', '.join(unknown)}")
    try:
        return replace(base, **overrides)
    except TypeError as e:
        raise ValueError(f"Invalid rule setting for '{strategy.value}': {e}") from e


def _section(mapping: Dict[str, Any], key: str, label: Optional[str] = None) -> Dict[str, Any]:
    """Nested section of a config file; {} when absent or null."""
    value = mapping.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{label or key}' must be a mapping")
    return value


def load_config_from_yaml(yaml_path: Union[str, Path]) -> SignalConfig:
    """
    Load signal configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        SignalConfig object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty, names an unknown base preset or strategy,
            or holds invalid values
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file must contain a mapping: {yaml_path}")

    base_name = config_dict.get('base', 'preview')
    if base_name not in PRESET_CONFIGS:
        available = ", ".join(PRESET_CONFIGS.keys())
        raise ValueError(f"Unknown base preset: {base_name}. Available: {available}")
    base = PRESET_CONFIGS[base_name]

    # Extract values from nested structure
    scan = _section(config_dict, 'scan')
    indicators = _section(config_dict, 'indicators')
    rsi = _section(indicators, 'rsi', 'indicators.rsi')
    ema = _section(indicators, 'ema', 'indicators.ema')

    rules = dict(base.rules)
    for key, overrides in _section(config_dict, 'rules').items():
        strategy = _parse_strategy_key(key)
        rules[strategy] = _merge_rule(base.rule_for(strategy), overrides or {}, strategy)

    # Build SignalConfig (validation happens in __post_init__)
    return SignalConfig(
        name=config_dict.get('name', yaml_path.stem),
        description=config_dict.get('description', base.description),
        rules=rules,
        warmup_bars=scan.get('warmup_bars', base.warmup_bars),
        trailing_bars=scan.get('trailing_bars', base.trailing_bars),
        rsi_period=rsi.get('period', base.rsi_period),
        ema_short_period=ema.get('short_period', base.ema_short_period),
        ema_long_period=ema.get('long_period', base.ema_long_period),
    )


def config_to_dict(config: SignalConfig) -> Dict[str, Any]:
    """Nested plain-dict form of a config (the YAML file layout)."""
    return {
        'name': config.name,
        'description': config.description,

        'scan': {
            'warmup_bars': config.warmup_bars,
            'trailing_bars': config.trailing_bars,
        },

        'indicators': {
            'rsi': {
                'period': config.rsi_period,
            },
            'ema': {
                'short_period': config.ema_short_period,
                'long_period': config.ema_long_period,
            },
        },

        'rules': {
            strategy.value: {name: getattr(rule, name) for name in RULE_FIELDS}
            for strategy, rule in config.rules.items()
        },
    }


def save_config_to_yaml(config: SignalConfig, yaml_path: Union[str, Path]):
    """
    Save signal configuration to YAML file.

    Every rule the config defines is written out in full.

    Args:
        config: SignalConfig object to save
        yaml_path: Path where to save YAML file
    """
    yaml_path = Path(yaml_path)

    # Ensure parent directory exists
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    # Write YAML
    with open(yaml_path, 'w') as f:
        yaml.dump(config_to_dict(config), f, default_flow_style=False, sort_keys=False)
