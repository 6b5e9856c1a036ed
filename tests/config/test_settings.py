"""
Tests for build configuration resolution.

Tests cover:
- Defaults
- Precedence of CLI values, environment and config file
- Validation errors
- Build directory naming
"""

import pytest
from pathlib import Path

from ndkbuild.config.settings import BuildConfiguration, resolve_configuration
from ndkbuild.core.exceptions import ConfigurationError


class TestBuildConfiguration:
    def test_defaults(self, tmp_path):
        config = BuildConfiguration(project_root=tmp_path)

        assert config.build_type == "Release"
        assert config.api_level == 24
        assert config.ndk_path is None
        assert config.clean is False
        assert config.jobs is None
        assert config.build_dir_prefix == "build-android"
        assert config.generator == "Ninja"
        assert config.stl == "c++_static"
        assert config.cmake_args == ()
        assert config.keep_going is False

    def test_is_immutable(self, tmp_path):
        config = BuildConfiguration(project_root=tmp_path)

        with pytest.raises(Exception):
            config.build_type = "Debug"

    def test_with_ndk_returns_copy(self, tmp_path):
        config = BuildConfiguration(project_root=tmp_path)

        resolved = config.with_ndk(Path("/opt/ndk"))

        assert resolved.ndk_path == Path("/opt/ndk")
        assert config.ndk_path is None

    def test_build_dir_per_abi(self):
        config = BuildConfiguration(project_root=Path("/src"))

        dirs = [config.build_dir(abi) for abi in ["arm64-v8a", "armeabi-v7a", "x86_64", "x86"]]

        assert dirs == [
            Path("/src/build-android-arm64-v8a"),
            Path("/src/build-android-armeabi-v7a"),
            Path("/src/build-android-x86_64"),
            Path("/src/build-android-x86"),
        ]
        assert len(set(dirs)) == 4

    def test_build_dir_is_stable(self):
        config = BuildConfiguration(project_root=Path("/src"), build_dir_prefix="out")

        assert config.build_dir("x86") == config.build_dir("x86") == Path("/src/out-x86")

    @pytest.mark.parametrize("build_type", ["release", "MinSizeRel", ""])
    def test_invalid_build_type(self, tmp_path, build_type):
        with pytest.raises(ConfigurationError, match="Invalid build type"):
            BuildConfiguration(project_root=tmp_path, build_type=build_type)

    @pytest.mark.parametrize("api_level", [0, -1, "24", True])
    def test_invalid_api_level(self, tmp_path, api_level):
        with pytest.raises(ConfigurationError):
            BuildConfiguration(project_root=tmp_path, api_level=api_level)

    def test_invalid_jobs(self, tmp_path):
        with pytest.raises(ConfigurationError):
            BuildConfiguration(project_root=tmp_path, jobs=0)

    def test_empty_prefix(self, tmp_path):
        with pytest.raises(ConfigurationError):
            BuildConfiguration(project_root=tmp_path, build_dir_prefix="")

    @pytest.mark.parametrize("name", ["build_dir_prefix", "generator", "stl"])
    @pytest.mark.parametrize("value", [5, "", None, ["Ninja"]])
    def test_string_fields_must_be_non_empty_strings(self, tmp_path, name, value):
        with pytest.raises(ConfigurationError, match="non-empty string"):
            BuildConfiguration(project_root=tmp_path, **{name: value})


class TestResolveConfiguration:
    def test_defaults_with_empty_environment(self, tmp_path):
        config = resolve_configuration(tmp_path, environ={})

        assert config.project_root == tmp_path.resolve()
        assert config.build_type == "Release"
        assert config.api_level == 24
        assert config.build_dir_prefix == "build-android"

    def test_environment_overrides_defaults(self, tmp_path):
        environ = {
            "BUILD_TYPE": "Debug",
            "ANDROID_PLATFORM": "29",
            "BUILD_DIR_PREFIX": "out-android",
        }

        config = resolve_configuration(tmp_path, environ=environ)

        assert config.build_type == "Debug"
        assert config.api_level == 29
        assert config.build_dir_prefix == "out-android"

    def test_android_prefixed_platform(self, tmp_path):
        config = resolve_configuration(tmp_path, environ={"ANDROID_PLATFORM": "android-26"})

        assert config.api_level == 26

    def test_cli_overrides_environment(self, tmp_path):
        config = resolve_configuration(
            tmp_path,
            build_type="RelWithDebInfo",
            api_level=30,
            build_dir_prefix="cli",
            environ={"BUILD_TYPE": "Debug", "ANDROID_PLATFORM": "29", "BUILD_DIR_PREFIX": "env"},
        )

        assert config.build_type == "RelWithDebInfo"
        assert config.api_level == 30
        assert config.build_dir_prefix == "cli"

    def test_file_config(self, tmp_path):
        file_config = {
            "build": {
                "type": "Debug",
                "platform": 26,
                "dir_prefix": "out/android",
                "generator": "Unix Makefiles",
                "stl": "c++_shared",
                "jobs": 8,
                "cmake_args": ["-DFOO=ON"],
            }
        }

        config = resolve_configuration(tmp_path, environ={}, file_config=file_config)

        assert config.build_type == "Debug"
        assert config.api_level == 26
        assert config.build_dir_prefix == "out/android"
        assert config.generator == "Unix Makefiles"
        assert config.stl == "c++_shared"
        assert config.jobs == 8
        assert config.cmake_args == ("-DFOO=ON",)

    def test_environment_overrides_file(self, tmp_path):
        file_config = {"build": {"type": "Debug", "platform": 26}}

        config = resolve_configuration(
            tmp_path,
            environ={"BUILD_TYPE": "Release", "ANDROID_PLATFORM": "33"},
            file_config=file_config,
        )

        assert config.build_type == "Release"
        assert config.api_level == 33

    def test_cli_overrides_file(self, tmp_path):
        file_config = {"build": {"jobs": 8, "generator": "Unix Makefiles"}}

        config = resolve_configuration(
            tmp_path, jobs=2, generator="Ninja", environ={}, file_config=file_config
        )

        assert config.jobs == 2
        assert config.generator == "Ninja"

    def test_cmake_args_file_then_cli(self, tmp_path):
        config = resolve_configuration(
            tmp_path,
            cmake_args=["-DB=2"],
            environ={},
            file_config={"build": {"cmake_args": ["-DA=1"]}},
        )

        assert config.cmake_args == ("-DA=1", "-DB=2")

    def test_flags_and_ndk(self, tmp_path):
        config = resolve_configuration(
            tmp_path,
            ndk_path=Path("/opt/ndk"),
            clean=True,
            keep_going=True,
            environ={},
        )

        assert config.ndk_path == Path("/opt/ndk")
        assert config.clean is True
        assert config.keep_going is True

    def test_invalid_environment_build_type(self, tmp_path):
        with pytest.raises(ConfigurationError):
            resolve_configuration(tmp_path, environ={"BUILD_TYPE": "Fast"})

    def test_invalid_environment_platform(self, tmp_path):
        with pytest.raises(ConfigurationError, match="API level"):
            resolve_configuration(tmp_path, environ={"ANDROID_PLATFORM": "latest"})

    def test_invalid_build_section(self, tmp_path):
        with pytest.raises(ConfigurationError):
            resolve_configuration(tmp_path, environ={}, file_config={"build": ["Debug"]})

    def test_invalid_cmake_args(self, tmp_path):
        with pytest.raises(ConfigurationError):
            resolve_configuration(
                tmp_path, environ={}, file_config={"build": {"cmake_args": "-DA=1"}}
            )

    @pytest.mark.parametrize("key", ["generator", "stl", "dir_prefix"])
    def test_non_string_file_values(self, tmp_path, key):
        with pytest.raises(ConfigurationError, match="non-empty string"):
            resolve_configuration(tmp_path, environ={}, file_config={"build": {key: 5}})

    def test_empty_ndk_path_is_unset(self, tmp_path):
        assert resolve_configuration(tmp_path, ndk_path="", environ={}).ndk_path is None
