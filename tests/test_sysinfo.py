"""sysinfo tests."""

from __future__ import annotations

import sys
from unittest import mock

import pytest

from cmdkit import sysinfo


def test_flags_match_platform():
    assert sysinfo.IS_MAC == (sys.platform == "darwin")
    assert sysinfo.IS_LINUX == sys.platform.startswith("linux")
    assert sysinfo.IS_WINDOWS == (sys.platform == "win32")
    assert sysinfo.is_mac() == sysinfo.IS_MAC
    assert sysinfo.is_linux() == sysinfo.IS_LINUX


@pytest.mark.parametrize(
    "machine, expected",
    [
        ("x86_64", "amd64"),
        ("AMD64", "amd64"),
        ("aarch64", "arm64"),
        ("arm64", "arm64"),
        ("i686", "386"),
        ("riscv64", "riscv64"),
    ],
)
def test_arch_name(machine: str, expected: str):
    with mock.patch("cmdkit.sysinfo.platform.machine", return_value=machine):
        assert sysinfo.arch_name() == expected


@pytest.mark.parametrize(
    "platform_name, expected",
    [
        ("darwin", "darwin"),
        ("linux", "linux"),
        ("win32", "windows"),
        ("freebsd14", "freebsd14"),
    ],
)
def test_os_name(platform_name: str, expected: str):
    with mock.patch.object(sysinfo.sys, "platform", platform_name):
        assert sysinfo.os_name() == expected


def test_full_version():
    with mock.patch("cmdkit.sysinfo.os_name", return_value="linux"), \
            mock.patch("cmdkit.sysinfo.arch_name", return_value="amd64"):
        assert sysinfo.full_version("1.2.0") == "1.2.0-linux-amd64"
