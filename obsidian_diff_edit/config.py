"""Configuration loading and vault registry."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml

from obsidian_diff_edit.constants import CONFIG_ENV_VAR, CONFIG_PATH
from obsidian_diff_edit.data_models import EditSettings, VaultConfiguration, VaultMetadata

logger = logging.getLogger(__name__)


def _load_settings(raw_settings: Any) -> EditSettings:
    """Validate the optional ``settings`` mapping."""
    if raw_settings is None:
        return EditSettings()
    if not isinstance(raw_settings, dict):
        raise ValueError("'settings' must be a mapping when present")

    defaults = EditSettings()
    context_lines = raw_settings.get("context_lines", defaults.context_lines)
    max_steps = raw_settings.get("snippet_max_patch_steps", defaults.snippet_max_patch_steps)
    threshold = raw_settings.get("anchor_match_threshold", defaults.anchor_match_threshold)

    if not isinstance(context_lines, int) or isinstance(context_lines, bool) or context_lines < 0:
        raise ValueError("'settings.context_lines' must be a non-negative integer")
    if not isinstance(max_steps, int) or isinstance(max_steps, bool) or max_steps < 1:
        raise ValueError("'settings.snippet_max_patch_steps' must be a positive integer")
    if not isinstance(threshold, (int, float)) or isinstance(threshold, bool) or not 0 < threshold <= 1:
        raise ValueError("'settings.anchor_match_threshold' must be a number in (0, 1]")

    return EditSettings(
        context_lines=context_lines,
        snippet_max_patch_steps=max_steps,
        anchor_match_threshold=float(threshold),
    )


def load_vault_configuration(config_path: Path = CONFIG_PATH) -> VaultConfiguration:
    """Load and validate the vault configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to ``vaults.yaml``
        next to the package.

    Returns:
        A fully populated :class:`VaultConfiguration` containing normalized vault
        metadata, the configured default vault name and the edit settings.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, invalid entries, bad settings).
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw_config, dict):
        raise ValueError("Vault configuration must be a YAML mapping")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        resolved_path = Path(raw_path).expanduser().resolve(strict=False)
        description = (entry.get("description") or "").strip()

        processed[name] = VaultMetadata(
            name=name,
            path=resolved_path,
            description=description,
        )

    default_vault = raw_config.get("default")
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Vault configuration must specify a 'default' vault present in the mapping")

    return VaultConfiguration(
        default_vault=default_vault,
        vaults=processed,
        settings=_load_settings(raw_config.get("settings")),
    )


def resolve_config_path(explicit: Optional[str] = None) -> Path:
    """Pick the configuration file: explicit argument, environment, then default."""
    candidate = explicit or os.environ.get(CONFIG_ENV_VAR)
    if candidate:
        return Path(candidate).expanduser()
    return CONFIG_PATH


@lru_cache(maxsize=1)
def get_vault_configuration() -> VaultConfiguration:
    """Load the configuration once per process, on first use."""
    config_path = resolve_config_path()
    configuration = load_vault_configuration(config_path)
    logger.info(
        "Loaded %d vault(s) from %s (default '%s')",
        len(configuration.vaults),
        config_path,
        configuration.default_vault,
    )
    return configuration
