"""
Tests for Configuration and Profile Discovery
=============================================
"""

from pathlib import Path

import pytest

from hrm_profile.config import (
    ToolConfig,
    default_profile_paths,
    find_profile,
)
from hrm_profile.errors import ProfileNotFoundError


class TestToolConfig:
    """Tests for ToolConfig.from_env()."""

    def test_defaults(self):
        config = ToolConfig.from_env({})
        assert config.profile_path is None
        assert config.wrap_width == 80
        assert config.log_level == "WARNING"

    def test_values_from_environment(self):
        config = ToolConfig.from_env({
            "HRM_PROFILE": "/tmp/profiles.bin",
            "HRM_WRAP_WIDTH": "60",
            "HRM_LOG_LEVEL": "debug",
        })
        assert config.profile_path == Path("/tmp/profiles.bin")
        assert config.wrap_width == 60
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("width", ["abc", "0", "-5"])
    def test_invalid_width_ignored(self, width):
        assert ToolConfig.from_env({"HRM_WRAP_WIDTH": width}).wrap_width == 80

    def test_invalid_log_level_ignored(self):
        assert ToolConfig.from_env({"HRM_LOG_LEVEL": "LOUD"}).log_level == "WARNING"


class TestDefaultPaths:
    """Tests for default_profile_paths()."""

    def test_windows_uses_appdata(self, tmp_path):
        paths = default_profile_paths("win32", tmp_path, {"APPDATA": "C:/Users/me/AppData/Roaming"})
        assert paths == [Path("C:/Users/me/AppData/Roaming/Human Resource Machine/profiles.bin")]

    def test_macos_has_two_locations(self, tmp_path):
        paths = default_profile_paths("darwin", tmp_path, {})
        assert len(paths) == 2
        assert all(path.name == "profiles.bin" for path in paths)
        assert "Containers" in str(paths[1])

    def test_linux(self, tmp_path):
        (path,) = default_profile_paths("linux", tmp_path, {})
        assert path == tmp_path / ".local/share/Tomorrow Corporation/Human Resource Machine/profiles.bin"

    def test_unknown_platform(self, tmp_path):
        assert default_profile_paths("plan9", tmp_path, {}) == []


class TestFindProfile:
    """Tests for find_profile()."""

    def _install(self, path: Path) -> Path:
        path.parent.mkdir(parents=True)
        path.write_bytes(b"")
        return path

    def test_explicit_path_wins(self, tmp_path):
        explicit = tmp_path / "mine.bin"
        found = find_profile(explicit, "linux", tmp_path, {"HRM_PROFILE": "/elsewhere"})
        assert found == explicit

    def test_environment_path(self, tmp_path):
        found = find_profile(None, "linux", tmp_path, {"HRM_PROFILE": "/elsewhere/profiles.bin"})
        assert found == Path("/elsewhere/profiles.bin")

    def test_single_default(self, tmp_path):
        (expected,) = default_profile_paths("linux", tmp_path, {})
        self._install(expected)
        assert find_profile(None, "linux", tmp_path, {}) == expected

    def test_no_default_exists(self, tmp_path):
        with pytest.raises(ProfileNotFoundError, match="no profiles found") as exc_info:
            find_profile(None, "linux", tmp_path, {})
        assert len(exc_info.value.candidates) == 1

    def test_several_defaults_exist(self, tmp_path):
        for path in default_profile_paths("darwin", tmp_path, {}):
            self._install(path)
        with pytest.raises(ProfileNotFoundError, match="multiple profiles exist"):
            find_profile(None, "darwin", tmp_path, {})

    def test_unknown_platform(self, tmp_path):
        with pytest.raises(ProfileNotFoundError, match="unknown OS"):
            find_profile(None, "plan9", tmp_path, {})
