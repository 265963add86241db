from __future__ import annotations
import logging
from pathlib import Path
import pytest
from fancy_ps1 import config
from fancy_ps1.config import (
    Configuration,
    find_config,
    load_config,
    load_user_config,
    parse_line,
)
from fancy_ps1.errors import MalformedConfig


def test_defaults() -> None:
    cfg = Configuration()
    assert cfg.style_names("user") == ("white", "blue", "bold")
    assert cfg.style_names("host") == ("white", "light-blue", "bold")
    assert cfg.style_names("pwd") == ("dark-gray", "white", "bold")
    assert cfg.style_names("git") == ("white", "dark-gray", "bold")
    assert cfg.style_names("input") == ("cyan", "none", "bold")
    assert cfg.separator_char == "\uE0B0"
    assert cfg.enable_vertical_padding
    assert cfg.show_user and cfg.show_host and cfg.show_pwd and cfg.show_git
    assert cfg.max_pwd_length == 20


def test_load_missing_file(tmp_path: Path) -> None:
    assert load_config(tmp_path / "nonexistent.config") == Configuration()


def test_load_config(tmp_path: Path) -> None:
    p = tmp_path / "fancy-ps1.config"
    p.write_text(
        "# Colors\n"
        "font_color_user = red\n"
        'background_user="light-green"\n'
        "texteffect_user = 'underline'\n"
        "\n"
        "   # indented comment\n"
        "enable_vertical_padding = false\n"
        "show_host = no\n"
        "max_pwd_length = 32\n"
        "separator_char = >\n"
        "some_other_key = whatever\n",
        encoding="utf-8",
    )
    assert load_config(p) == Configuration(
        font_color_user="red",
        background_user="light-green",
        texteffect_user="underline",
        enable_vertical_padding=False,
        show_host=False,
        max_pwd_length=32,
        separator_char=">",
    )


def test_load_config_malformed_lines(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    p = tmp_path / "fancy-ps1.config"
    p.write_text(
        "show_git = false\n"
        "this line has no equals sign\n"
        "show_user = maybe\n"
        "max_pwd_length = long\n"
        "max_pwd_length = 0\n"
        "separator_char = ->\n"
        "= blue\n"
        "background_git = red\n",
        encoding="utf-8",
    )
    with caplog.at_level(logging.WARNING, logger="fancy_ps1.config"):
        cfg = load_config(p)
    assert cfg == Configuration(show_git=False, background_git="red")
    warnings = [r.getMessage() for r in caplog.records]
    assert len(warnings) == 6
    assert warnings[0].startswith(f"{p}:2: ")
    assert warnings[1] == f"{p}:3: show_user: Invalid boolean 'maybe'"


def test_load_config_undecodable(tmp_path: Path) -> None:
    p = tmp_path / "fancy-ps1.config"
    p.write_bytes(b"show_git = \xFF\xFE\n")
    with pytest.raises(MalformedConfig):
        load_config(p)


def test_load_user_config_undecodable(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    p = tmp_path / "fancy-ps1.config"
    p.write_bytes(b"show_git = \xFF\xFE\n")
    with caplog.at_level(logging.WARNING, logger="fancy_ps1.config"):
        assert load_user_config(p) == Configuration()
    assert "using default configuration" in caplog.text


@pytest.mark.parametrize(
    "line,parsed",
    [
        ("", None),
        ("   ", None),
        ("# show_git = false", None),
        ("show_git=false", ("show_git", "false")),
        ("  show_git   =   false  ", ("show_git", "false")),
        ('font_color_user = "light blue"', ("font_color_user", "light blue")),
        ("font_color_user = 'red\"", ("font_color_user", "'red\"")),
        ("background_input =", ("background_input", "")),
    ],
)
def test_parse_line(line: str, parsed: tuple[str, str] | None) -> None:
    assert parse_line(line) == parsed


@pytest.fixture
def config_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, Path]:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    user_cfg = home / ".config" / "fancy-ps1" / "fancy-ps1.config"
    sys_cfg = tmp_path / "etc" / "fancy-ps1" / "fancy-ps1.config"
    monkeypatch.setattr(config, "SYSTEM_CONFIG_PATH", sys_cfg)
    return (user_cfg, sys_cfg)


def test_find_config_none(config_dirs: tuple[Path, Path]) -> None:
    assert find_config() is None
    assert load_user_config() == Configuration()


def test_find_config_system(config_dirs: tuple[Path, Path]) -> None:
    _, sys_cfg = config_dirs
    sys_cfg.parent.mkdir(parents=True)
    sys_cfg.write_text("show_host = false\n", encoding="utf-8")
    assert find_config() == sys_cfg
    assert load_user_config() == Configuration(show_host=False)


def test_find_config_user_wins(config_dirs: tuple[Path, Path]) -> None:
    user_cfg, sys_cfg = config_dirs
    sys_cfg.parent.mkdir(parents=True)
    sys_cfg.write_text("show_host = false\n", encoding="utf-8")
    user_cfg.parent.mkdir(parents=True)
    user_cfg.write_text("show_user = false\n", encoding="utf-8")
    assert find_config() == user_cfg
    # No merging: the system file's settings are not applied
    assert load_user_config() == Configuration(show_user=False)
