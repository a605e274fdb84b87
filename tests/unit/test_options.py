from pathlib import Path

import pytest
from pydantic import ValidationError
from pytest_mock import MockerFixture

from verman.release.options import (
    NamingStrategy,
    Options,
    current_arch,
    current_os,
    strip_tag_prefix,
    template_naming,
)


def _name(version: str, os_name: str, arch: str) -> str:
    return f"tool-{version}-{os_name}-{arch}"


class TestOptions:
    """Tests for verman.release.options."""

    def test_explicit_platform_is_kept(self, tmp_path: Path):
        options = Options(
            organization="acme",
            repository="tool",
            os="windows",
            arch="386",
            naming=NamingStrategy.single(_name),
            releases_path=tmp_path,
        )
        assert options.os == "windows"
        assert options.arch == "386"

    def test_blank_platform_defaults_to_running_platform(self, tmp_path: Path, mocker: MockerFixture):
        mocker.patch("verman.release.options.current_os", return_value="darwin")
        mocker.patch("verman.release.options.current_arch", return_value="arm64")

        options = Options(organization="acme", repository="tool", naming=NamingStrategy.single(_name), releases_path=tmp_path)

        assert options.os == "darwin"
        assert options.arch == "arm64"

    def test_options_are_frozen(self, options: Options):
        with pytest.raises(ValidationError):
            options.os = "windows"  # type: ignore[misc]

    def test_asset_and_exe_names_strip_tag_prefix(self, tmp_path: Path):
        naming = NamingStrategy(asset_name=_name, exe_name=lambda version, os_name, arch: f"tool-{version}")
        options = Options(organization="acme", repository="tool", os="linux", arch="amd64", naming=naming, releases_path=tmp_path)

        assert options.asset_name("v1.2.3") == "tool-1.2.3-linux-amd64"
        assert options.exe_name("v1.2.3") == "tool-1.2.3"
        assert options.asset_name("nightly") == "tool-nightly-linux-amd64"

    def test_naming_requires_callables(self):
        with pytest.raises(ValidationError):
            NamingStrategy(asset_name="tool-linux", exe_name=_name)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [("v1.0.0", "1.0.0"), ("V1.0.0", "1.0.0"), ("1.0.0", "1.0.0"), ("nightly", "nightly"), ("", "")],
    )
    def test_strip_tag_prefix(self, tag: str, expected: str):
        assert strip_tag_prefix(tag) == expected

    # --- platform detection ---

    @pytest.mark.parametrize(
        ("sys_platform", "expected"),
        [("linux", "linux"), ("darwin", "darwin"), ("win32", "windows"), ("freebsd14", "freebsd")],
    )
    def test_current_os(self, mocker: MockerFixture, sys_platform: str, expected: str):
        mocker.patch("verman.release.options.sys.platform", sys_platform)
        assert current_os() == expected

    @pytest.mark.parametrize(
        ("machine", "expected"),
        [("x86_64", "amd64"), ("AMD64", "amd64"), ("aarch64", "arm64"), ("arm64", "arm64"), ("i686", "386"), ("riscv64", "riscv64")],
    )
    def test_current_arch(self, mocker: MockerFixture, machine: str, expected: str):
        mocker.patch("verman.release.options.platform.machine", return_value=machine)
        assert current_arch() == expected


class TestTemplateNaming:
    """Tests for verman.release.options.template_naming."""

    def test_most_specific_key_wins(self):
        name_func = template_naming(
            {
                "linux/arm64": "tool-{version}-linux-arm",
                "linux": "tool-{version}-{os}-{arch}",
                "*": "tool-{version}.zip",
            }
        )
        assert name_func("1.0.0", "linux", "arm64") == "tool-1.0.0-linux-arm"
        assert name_func("1.0.0", "linux", "amd64") == "tool-1.0.0-linux-amd64"
        assert name_func("1.0.0", "darwin", "amd64") == "tool-1.0.0.zip"

    def test_missing_platform_returns_empty_name(self):
        name_func = template_naming({"linux": "tool-linux"})
        assert name_func("1.0.0", "windows", "amd64") == ""

    @pytest.mark.parametrize("template", ["tool-{name}-{os}", "tool-{os", "tool-{0}", "tool-{version.major}"])
    def test_malformed_template_rejected_upfront(self, template: str):
        with pytest.raises(ValueError, match="template"):
            template_naming({"linux": template})

    def test_escaped_braces_are_literal(self):
        assert template_naming({"*": "tool-{{{version}}}"})("1.0.0", "linux", "amd64") == "tool-{1.0.0}"
