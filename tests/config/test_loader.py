"""Tests for config discovery, profile resolution and fail-closed loading."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from pimctl.config import loader
from pimctl.config.models import DomainFilterConfig, FilterMode, PimConfiguration
from pimctl.errors import InvalidProfileName, MalformedConfig, ProfileNotFound

WriteBase = Callable[[Any], Path]
WriteProfile = Callable[[str, Any], Path]


class TestConfigDir:
    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APPLE_PIM_CONFIG_DIR", str(tmp_path / "custom"))
        assert loader.config_dir() == tmp_path / "custom"

    def test_empty_env_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APPLE_PIM_CONFIG_DIR", "")
        assert loader.config_dir() == Path.home() / ".config" / "apple-pim"

    def test_unset_env_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("APPLE_PIM_CONFIG_DIR")
        assert loader.config_dir() == Path.home() / ".config" / "apple-pim"

    def test_explicit_root_wins(self, tmp_path: Path) -> None:
        assert loader.config_dir(tmp_path) == tmp_path

    def test_derived_paths(self, tmp_path: Path) -> None:
        assert loader.base_config_path(tmp_path) == tmp_path / "config.json"
        assert loader.profiles_dir(tmp_path) == tmp_path / "profiles"
        assert loader.profile_path("work", tmp_path) == tmp_path / "profiles" / "work.json"

    @pytest.mark.parametrize("name", ["../../etc/passwd", "a/b/work", "a\\work"])
    def test_profile_path_keeps_last_component(self, tmp_path: Path, name: str) -> None:
        path = loader.profile_path(name, tmp_path)
        assert path.parent == tmp_path / "profiles"


class TestValidateProfileName:
    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\\b", ".hidden", "x..y"])
    def test_rejects(self, name: str) -> None:
        with pytest.raises(InvalidProfileName) as exc_info:
            loader.validate_profile_name(name)
        assert exc_info.value.code == "INVALID_PROFILE_NAME"

    @pytest.mark.parametrize("name", ["work", "travel-2", "Agent_A", "v1.2"])
    def test_accepts(self, name: str) -> None:
        loader.validate_profile_name(name)


class TestResolveProfileName:
    def test_none_without_env(self) -> None:
        assert loader.resolve_profile_name(None) is None

    def test_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APPLE_PIM_PROFILE", "travel")
        assert loader.resolve_profile_name(None) == "travel"

    def test_explicit_beats_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APPLE_PIM_PROFILE", "travel")
        assert loader.resolve_profile_name("work") == "work"

    def test_empty_env_is_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APPLE_PIM_PROFILE", "")
        assert loader.resolve_profile_name(None) is None


class TestLoadBaseConfig:
    def test_missing_file_gives_defaults(self) -> None:
        assert loader.load_base_config() == PimConfiguration()

    def test_loads_file(self, write_base: WriteBase) -> None:
        write_base(
            {
                "calendars": {"enabled": True, "mode": "allowlist", "items": ["Work"]},
                "default_calendar": "Work",
            }
        )
        cfg = loader.load_base_config()
        assert cfg.calendars.mode is FilterMode.ALLOWLIST
        assert cfg.calendars.items == ["Work"]
        assert cfg.default_calendar == "Work"
        assert cfg.reminders == DomainFilterConfig()

    @pytest.mark.parametrize("content", ["{not json", "", "[]", '{"calendars": {"items": 5}}'])
    def test_malformed_file_gives_defaults(self, write_base: WriteBase, content: str) -> None:
        write_base(content)
        assert loader.load_base_config() == PimConfiguration()

    def test_malformed_file_logs_warning(
        self, write_base: WriteBase, capfd: pytest.CaptureFixture[str]
    ) -> None:
        from pimctl.config.logging import configure_logging

        configure_logging(log_json=True)
        write_base("{broken")
        loader.load_base_config()
        assert "failed to parse base config" in capfd.readouterr().err

    def test_embedded_use_keeps_stdout_clean(
        self, write_base: WriteBase, capfd: pytest.CaptureFixture[str]
    ) -> None:
        from pimctl.policy import AccessPolicy

        write_base("{broken")
        assert loader.load_base_config() == PimConfiguration()
        assert AccessPolicy.load().config == PimConfiguration()
        assert capfd.readouterr().out == ""


class TestLoadProfile:
    def test_missing_is_none(self) -> None:
        assert loader.load_profile("ghost") is None

    def test_loads_override(self, write_profile_file: WriteProfile) -> None:
        write_profile_file("work", {"mail": {"enabled": False}})
        override = loader.load_profile("work")
        assert override is not None
        assert override.mail is not None
        assert override.mail.enabled is False
        assert override.calendars is None

    def test_malformed_raises(self, write_profile_file: WriteProfile) -> None:
        path = write_profile_file("work", "{oops")
        with pytest.raises(MalformedConfig) as exc_info:
            loader.load_profile("work")
        assert exc_info.value.path == path


class TestLoad:
    def test_no_profile_returns_base(self, write_base: WriteBase) -> None:
        write_base({"default_calendar": "Home"})
        assert loader.load() == PimConfiguration(default_calendar="Home")

    def test_missing_profile_fails_closed(self, write_base: WriteBase) -> None:
        write_base({"calendars": {"mode": "allowlist", "items": ["Work"]}})
        with pytest.raises(ProfileNotFound) as exc_info:
            loader.load("ghost")
        assert exc_info.value.name == "ghost"
        assert exc_info.value.path.name == "ghost.json"

    def test_missing_env_profile_fails_closed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APPLE_PIM_PROFILE", "ghost")
        with pytest.raises(ProfileNotFound):
            loader.load()

    def test_invalid_name_fails_before_filesystem(
        self, write_profile_file: WriteProfile, config_root: Path
    ) -> None:
        (config_root / "secret.json").parent.mkdir(parents=True, exist_ok=True)
        (config_root / "secret.json").write_text("{}")
        with pytest.raises(InvalidProfileName):
            loader.load("../secret")

    def test_malformed_profile_fails_closed(
        self, write_base: WriteBase, write_profile_file: WriteProfile
    ) -> None:
        write_base({})
        write_profile_file("work", "not json")
        with pytest.raises(MalformedConfig):
            loader.load("work")

    def test_work_profile_scenario(
        self, write_base: WriteBase, write_profile_file: WriteProfile
    ) -> None:
        write_base({"calendars": {"enabled": True, "mode": "all", "items": []}})
        write_profile_file(
            "work",
            {
                "calendars": {"enabled": True, "mode": "allowlist", "items": ["Work"]},
                "mail": {"enabled": False},
            },
        )
        resolved = loader.load("work")
        assert resolved.calendars.mode is FilterMode.ALLOWLIST
        assert resolved.calendars.items == ["Work"]
        assert resolved.mail.enabled is False
        assert resolved.reminders == loader.load_base_config().reminders

    def test_profile_over_missing_base(self, write_profile_file: WriteProfile) -> None:
        write_profile_file("kids", {"contacts": {"enabled": False}})
        resolved = loader.load("kids")
        assert resolved.contacts.enabled is False
        assert resolved.calendars == DomainFilterConfig()

    def test_profile_over_malformed_base(
        self, write_base: WriteBase, write_profile_file: WriteProfile
    ) -> None:
        write_base("{broken")
        write_profile_file("kids", {"default_calendar": "Family"})
        assert loader.load("kids").default_calendar == "Family"

    def test_rereads_on_every_call(self, write_base: WriteBase) -> None:
        write_base({"default_calendar": "One"})
        assert loader.load().default_calendar == "One"
        write_base({"default_calendar": "Two"})
        assert loader.load().default_calendar == "Two"

    def test_explicit_root(self, tmp_path: Path) -> None:
        other = tmp_path / "other"
        (other / "profiles").mkdir(parents=True)
        (other / "profiles" / "p.json").write_text('{"default_calendar": "Elsewhere"}')
        assert loader.load("p", other).default_calendar == "Elsewhere"


class TestLoadWithSources:
    def test_reports_sources(
        self, config_root: Path, write_profile_file: WriteProfile
    ) -> None:
        write_profile_file("work", {})
        loaded = loader.load_with_sources("work")
        assert loaded.config_path == config_root / "config.json"
        assert loaded.profiles_dir == config_root / "profiles"
        assert loaded.profile == "work"
        assert loaded.profile_path == config_root / "profiles" / "work.json"

    def test_no_profile(self) -> None:
        loaded = loader.load_with_sources()
        assert loaded.profile is None
        assert loaded.profile_path is None
        assert loaded.config == PimConfiguration()


class TestListProfiles:
    def test_empty_when_no_dir(self) -> None:
        assert loader.list_profiles() == []

    def test_sorted_valid_names(self, write_profile_file: WriteProfile, config_root: Path) -> None:
        write_profile_file("work", {})
        write_profile_file("family", {})
        (config_root / "profiles" / "notes.txt").write_text("x")
        (config_root / "profiles" / ".hidden.json").write_text("{}")
        assert loader.list_profiles() == ["family", "work"]
