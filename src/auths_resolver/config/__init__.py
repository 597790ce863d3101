"""Configuration: YAML + env overlay."""

from auths_resolver.config.loader import load_config, load_config_with_env
from auths_resolver.config.schema import Config, cfg

__all__ = ["Config", "cfg", "load_config", "load_config_with_env"]
