"""Unit tests for XDG path management and rules path resolution."""

import os
from pathlib import Path
from unittest.mock import patch

from diskcare.core.paths import (
    APP_NAME,
    get_config_dir,
    get_default_logs_dir,
    get_latest_run_path,
    get_project_rules_path,
    get_settings_path,
    get_state_dir,
    get_user_rules_path,
    resolve_rules_path,
)


class TestXdgDirs:
    """Tests for the XDG base directories."""

    def test_default_config_dir(self) -> None:
        """get_config_dir falls back to ~/.config when XDG_CONFIG_HOME is unset."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_config_dir()
            expected = Path.home() / ".config" / APP_NAME

        assert result == expected

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_dir() == tmp_path / APP_NAME

    def test_default_state_dir(self) -> None:
        """get_state_dir falls back to ~/.local/state when XDG_STATE_HOME is unset."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_state_dir()
            expected = Path.home() / ".local" / "state" / APP_NAME

        assert result == expected

    def test_derived_paths(self, tmp_path: Path) -> None:
        """Settings, rules, and logs live under the XDG dirs."""
        env = {"XDG_CONFIG_HOME": str(tmp_path / "c"), "XDG_STATE_HOME": str(tmp_path / "s")}
        with patch.dict(os.environ, env):
            assert get_settings_path() == tmp_path / "c" / APP_NAME / "settings.toml"
            assert get_user_rules_path() == tmp_path / "c" / APP_NAME / "rules.json"
            assert get_default_logs_dir() == tmp_path / "s" / APP_NAME / "logs"

    def test_latest_run_path(self, tmp_path: Path) -> None:
        """The pointer sits in the meta subdirectory of the logs dir."""
        assert get_latest_run_path(tmp_path) == tmp_path / "meta" / "latest-run.json"


class TestResolveRulesPath:
    """Tests for resolve_rules_path lookup order."""

    def test_explicit_absolute(self, tmp_path: Path) -> None:
        """An explicit absolute path wins even if it does not exist."""
        explicit = tmp_path / "mine.json"

        assert resolve_rules_path(explicit, cwd=tmp_path) == explicit

    def test_explicit_relative(self, tmp_path: Path) -> None:
        """An explicit relative path is resolved against cwd."""
        result = resolve_rules_path(Path("conf/r.json"), cwd=tmp_path)

        assert result == (tmp_path / "conf" / "r.json").resolve()

    def test_project_local(self, tmp_path: Path) -> None:
        """config/rules.json in cwd is used when present."""
        local = get_project_rules_path(tmp_path)
        local.parent.mkdir()
        local.write_text("{}")

        assert resolve_rules_path(cwd=tmp_path, configured=Path("/elsewhere.json")) == local

    def test_configured(self, tmp_path: Path) -> None:
        """The settings path is used when there is no project config."""
        configured = tmp_path / "from-settings.json"

        assert resolve_rules_path(cwd=tmp_path, configured=configured) == configured

    def test_user_default(self, tmp_path: Path) -> None:
        """Without anything else the per-user path is returned."""
        assert resolve_rules_path(cwd=tmp_path) == get_user_rules_path()
