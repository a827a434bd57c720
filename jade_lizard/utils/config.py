from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from ..strategy.lizards import STRATEGIES

# Shipped as package data next to the code
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "configs" / "lizards.yaml"

DEFAULTS = {
    'output_dir': 'outputs',
    'dpi': 140,
    'strict': False,
}


def load_config(config_path) -> Dict[str, Any]:
    """Load YAML configuration file."""
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)
    if not isinstance(config, dict):
        raise ValueError(f"Invalid YAML config: {config_path}")
    return config


def merge_configs(base: Dict, override: Dict) -> Dict:
    """Deep merge two config dicts."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def run_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    defaults = config.get('defaults') or {}
    if not isinstance(defaults, dict):
        raise ValueError("config.defaults must be a mapping")
    merged = merge_configs(DEFAULTS, defaults)
    dpi = merged["dpi"]
    if isinstance(dpi, bool) or not isinstance(dpi, int) or dpi <= 0:
        raise ValueError(f"config.defaults.dpi must be a positive integer, got {dpi!r}")
    if not isinstance(merged["output_dir"], str) or not merged["output_dir"]:
        raise ValueError(f"config.defaults.output_dir must be a path string, got {merged['output_dir']!r}")
    if not isinstance(merged["strict"], bool):
        raise ValueError(f"config.defaults.strict must be true or false, got {merged['strict']!r}")
    return merged


def strategy_inputs(entry: Dict[str, Any]):
    """Build a lizard inputs record from one `strategies` entry."""
    params = dict(entry)
    label = params.pop('name', None)
    kind = params.pop('strategy', None)
    if kind not in STRATEGIES:
        raise KeyError(f"Unsupported strategy: {kind} (entry {label})")
    for key, value in params.items():
        # YAML turns `ten` into a string and an empty value into None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{label}: {key} must be a number, got {value!r}")
    try:
        return STRATEGIES[kind](**params)
    except TypeError as exc:
        raise ValueError(f"Bad parameters for {label}: {exc}") from exc


def strategy_inputs_from_config(config: Dict[str, Any]) -> List[Tuple[str, Any]]:
    entries = config.get('strategies') or []
    if not isinstance(entries, list):
        raise ValueError("config.strategies must be a list")
    named = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"config.strategies[{i}] must be a mapping")
        inputs = strategy_inputs(entry)
        named.append((entry.get('name') or f"{inputs.name}_{i}", inputs))
    return named
