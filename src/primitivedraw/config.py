"""
Configuration management for primitivedraw.

Loads YAML configuration with sensible defaults for the search and tracing.
Command-line flags are applied on top by the CLI.
"""

import os
from dataclasses import asdict, dataclass, field, fields

import yaml


@dataclass
class SearchConfig:
    """Configuration for the shape search."""
    shape_count: int = 100
    max_age: int = 100
    scale_to: int = 100  # longest side of the search canvas; <= 0 keeps original size
    seed: int = 0  # 0 derives a seed from the clock
    shape: str = "triangle"  # a family name or "mixed"
    background: str = None  # RRGGBB; None uses the image's average color
    border_extension: int = 6
    max_failed_attempts: int = 0  # 0 retries forever


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class PrimitiveConfig:
    """Complete run configuration."""
    search: SearchConfig = field(default_factory=SearchConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = PrimitiveConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML sections into the config dataclasses; unknown keys are ignored."""
    for section in fields(config):
        values = yaml_data.get(section.name)
        if not isinstance(values, dict):
            continue
        target = getattr(config, section.name)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = asdict(PrimitiveConfig())

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
