"""Tests for ErdSettings — unified settings with TOML source."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from erdomain.config.settings import ErdSettings
from erdomain.domain.types import LinkTypeOptions


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("ERDOMAIN_CONFIG", "ERDOMAIN_DOMAIN__NAME", "ERDOMAIN_QUIET"):
        monkeypatch.delenv(var, raising=False)


class TestErdSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = ErdSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.domain.name == "default"
        assert settings.link_types == {}

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ErdSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):  # noqa: B017
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "erdomain.toml").write_text(
            '[domain]\nname = "social"\n\n[link_types.friend]\nmutual = true\n'
        )
        settings = ErdSettings.from_cli(root=tmp_path)
        assert settings.domain.name == "social"
        assert settings.domain.consistent_removal is True
        assert settings.link_types == {"friend": LinkTypeOptions(mutual=True)}
        assert settings.config_path == tmp_path / "erdomain.toml"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[domain]\nname = "custom"\n')
        settings = ErdSettings.from_cli(config_path=str(custom))
        assert settings.domain.name == "custom"
        assert settings.config_path == custom
        assert settings.root == custom.parent

    def test_missing_explicit_path_means_no_config(self, tmp_path: Path) -> None:
        (tmp_path / "erdomain.toml").write_text('[domain]\nname = "found"\n')
        settings = ErdSettings.from_cli(config_path=str(tmp_path / "nope.toml"), root=tmp_path)
        assert settings.config_path is None
        assert settings.domain.name == "default"

    def test_invalid_toml_raises_click_error(self, tmp_path: Path) -> None:
        (tmp_path / "erdomain.toml").write_text("[domain\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ErdSettings.from_cli(root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "erdomain.toml").write_text('[domain]\nname = "toml"\n')
        monkeypatch.setenv("ERDOMAIN_DOMAIN__NAME", "env")
        settings = ErdSettings.from_cli(root=tmp_path)
        assert settings.domain.name == "env"

    def test_cli_flag_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ERDOMAIN_QUIET", "true")
        assert ErdSettings.from_cli(root=tmp_path).quiet is True
        assert ErdSettings.from_cli(root=tmp_path, quiet=False).quiet is False

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = ErdSettings.from_cli(root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True
