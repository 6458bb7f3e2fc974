"""Data loading and configuration management."""

from doubloon_powah.data.config import DeploymentConfig
from doubloon_powah.data.loader import (
    CONFIG_ENV_VAR,
    get_deployment,
    get_supported_networks,
    load_defaults,
    load_user_config,
    resolve_config_path,
    save_deployment,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DeploymentConfig",
    "get_deployment",
    "get_supported_networks",
    "load_defaults",
    "load_user_config",
    "resolve_config_path",
    "save_deployment",
]
