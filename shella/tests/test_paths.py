from __future__ import annotations

import pytest

from shella.paths import home_history_path, user_home_dir
from shella.shell import Shell

_HOME_VARS = ("HOME", "XDG_CONFIG_HOME", "HOMEDRIVE", "HOMEPATH", "USERPROFILE")


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _HOME_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_linux_prefers_xdg_config_home(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("HOME", "/home/ada")
    assert user_home_dir("linux") == "/home/ada"

    clean_env.setenv("XDG_CONFIG_HOME", "/home/ada/.config")
    assert user_home_dir("linux") == "/home/ada/.config"


def test_other_unix_ignores_xdg(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("HOME", "/Users/ada")
    clean_env.setenv("XDG_CONFIG_HOME", "/Users/ada/.config")

    assert user_home_dir("darwin") == "/Users/ada"


def test_windows_combines_drive_and_path(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("USERPROFILE", r"C:\Users\fallback")
    assert user_home_dir("win32") == r"C:\Users\fallback"

    clean_env.setenv("HOMEDRIVE", "D:")
    clean_env.setenv("HOMEPATH", r"\Users\ada")
    assert user_home_dir("win32") == r"D:\Users\ada"


def test_unresolved_home_is_empty(clean_env: pytest.MonkeyPatch) -> None:
    assert user_home_dir("linux") == ""
    assert user_home_dir("win32") == ""
    assert home_history_path(".hist", platform="linux") == "/.hist"


def test_set_home_history_file_resolves_against_home(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("HOME", "/home/ada")
    clean_env.setenv("XDG_CONFIG_HOME", "/home/ada/.config")
    shell = Shell()

    shell.set_home_history_file(".shella_history")

    expected = home_history_path(".shella_history")
    assert shell.line_config.history_file == expected
    assert expected.endswith("/.shella_history")


def test_cygwin_uses_home(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("HOME", "/home/ada")
    clean_env.setenv("USERPROFILE", r"C:\Users\ada")

    assert user_home_dir("cygwin") == "/home/ada"
