"""Deployment configuration loader."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from doubloon_powah.data.config import DeploymentConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DOUBLOON_POWAH_CONFIG"


def load_defaults() -> dict[str, Any]:
    """
    Load packaged per-network defaults from deployments.yaml.

    Returns
    -------
    dict[str, Any]
        Configuration with a top-level ``networks`` mapping

    """
    path = Path(__file__).parent / "deployments.yaml"
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def resolve_config_path(path: Path | None = None) -> Path | None:
    """
    Pick the user deployment file.

    Parameters
    ----------
    path : Path | None
        Explicit path; takes precedence over the environment

    Returns
    -------
    Path | None
        ``path``, else the value of ``DOUBLOON_POWAH_CONFIG``, else None

    """
    if path is not None:
        return path
    env_path = os.getenv(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else None


def load_user_config(path: Path | None) -> dict[str, Any]:
    """
    Load a user deployment file.

    Parameters
    ----------
    path : Path | None
        File to read; a missing path yields an empty configuration

    Returns
    -------
    dict[str, Any]
        Parsed YAML, ``{}`` when there is nothing to read

    """
    if path is None or not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_supported_networks(path: Path | None = None) -> list[str]:
    """
    Get names of all networks known to the packaged defaults or the user file.

    Returns
    -------
    list[str]
        Network names, packaged ones first

    """
    names = list(load_defaults().get("networks", {}))
    user = load_user_config(resolve_config_path(path))
    names.extend(name for name in user.get("networks", {}) if name not in names)
    return names


def get_deployment(network: str, path: Path | None = None) -> DeploymentConfig:
    """
    Get the merged configuration of one network.

    User values override packaged defaults key by key.

    Parameters
    ----------
    network : str
        Network name (e.g., 'ethereum')
    path : Path | None
        User deployment file (falls back to ``DOUBLOON_POWAH_CONFIG``)

    Returns
    -------
    DeploymentConfig
        Validated configuration

    Raises
    ------
    KeyError
        If neither file defines ``network``
    pydantic.ValidationError
        If required addresses are missing or malformed

    """
    defaults = load_defaults().get("networks", {})
    user_path = resolve_config_path(path)
    user = load_user_config(user_path).get("networks", {})

    if network not in defaults and network not in user:
        msg = f"Unknown network: {network}"
        raise KeyError(msg)

    merged = {**defaults.get(network, {}), **(user.get(network) or {})}
    logger.debug("Loaded %s deployment from %s", network, user_path or "packaged defaults")
    return DeploymentConfig.model_validate(merged)


def save_deployment(path: Path, network: str, config: DeploymentConfig) -> None:
    """
    Write one network section of a user deployment file.

    Other networks in the file are left untouched.

    Parameters
    ----------
    path : Path
        User deployment file (created if missing)
    network : str
        Network name
    config : DeploymentConfig
        Configuration to store

    """
    data = load_user_config(path)
    data.setdefault("networks", {})[network] = config.model_dump(mode="json", exclude_none=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False)
    logger.info("Saved %s deployment to %s", network, path)
