"""Tests for vault configuration loading."""

from pathlib import Path

import pytest

from obsidian_diff_edit.config import load_vault_configuration, resolve_config_path
from obsidian_diff_edit.constants import CONFIG_ENV_VAR, CONFIG_PATH


def _write_config(tmp_path: Path, text: str) -> Path:
    config_path = tmp_path / "vaults.yaml"
    config_path.write_text(text, encoding="utf-8")
    return config_path


def test_loads_vaults_and_default_settings(tmp_path: Path) -> None:
    vault_dir = tmp_path / "notes"
    vault_dir.mkdir()
    config_path = _write_config(
        tmp_path,
        f"default: personal\nvaults:\n  personal:\n    path: {vault_dir}\n    description: My notes\n",
    )

    configuration = load_vault_configuration(config_path)

    assert configuration.default_vault == "personal"
    personal = configuration.get("personal")
    assert personal.path == vault_dir.resolve()
    assert personal.description == "My notes"
    assert configuration.settings.context_lines == 3
    assert configuration.settings.snippet_max_patch_steps == 8
    assert configuration.settings.anchor_match_threshold == 0.75


def test_settings_block_overrides_defaults(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path,
        "default: work\n"
        "vaults:\n  work:\n    path: /nonexistent/vault\n"
        "settings:\n  context_lines: 5\n  snippet_max_patch_steps: 3\n  anchor_match_threshold: 0.9\n",
    )

    configuration = load_vault_configuration(config_path)

    assert configuration.get("work").path == Path("/nonexistent/vault")
    assert configuration.settings.context_lines == 5
    assert configuration.settings.snippet_max_patch_steps == 3
    assert configuration.settings.anchor_match_threshold == 0.9


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_vault_configuration(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "default: personal\n",
        "default: other\nvaults:\n  personal:\n    path: /tmp\n",
        "default: personal\nvaults:\n  personal: /tmp\n",
        "default: personal\nvaults:\n  personal:\n    description: no path\n",
        "default: personal\nvaults:\n  personal:\n    path: /tmp\nsettings:\n  context_lines: -1\n",
        "default: personal\nvaults:\n  personal:\n    path: /tmp\nsettings:\n  anchor_match_threshold: 2\n",
    ],
)
def test_invalid_configuration_raises(tmp_path: Path, text: str) -> None:
    with pytest.raises(ValueError):
        load_vault_configuration(_write_config(tmp_path, text))


def test_unknown_vault_lists_known_names(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, "default: personal\nvaults:\n  personal:\n    path: /tmp\n")
    configuration = load_vault_configuration(config_path)

    with pytest.raises(ValueError, match="personal"):
        configuration.get("missing")


def test_config_path_resolution(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert resolve_config_path() == CONFIG_PATH

    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.yaml"))
    assert resolve_config_path() == tmp_path / "env.yaml"
    assert resolve_config_path(str(tmp_path / "cli.yaml")) == tmp_path / "cli.yaml"
