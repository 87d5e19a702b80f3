"""Tests for configuration loading and the cookie ignore list."""

from __future__ import annotations

from pathlib import Path

import pytest

from cookie_scope.core.config import (
    IGNORE_LIST_ENV,
    get_cookie_ignore_list,
    load_config,
    load_ignore_list,
)


def test_load_config_missing_file(tmp_path: Path) -> None:
    assert load_config(tmp_path / "nope.toml") == {}


def test_load_config(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('[rules.cookie]\nignorelist = "_ga, _gid"\n')
    assert load_config(path) == {"rules": {"cookie": {"ignorelist": "_ga, _gid"}}}


class TestIgnoreList:
    def test_empty_without_config(self) -> None:
        assert get_cookie_ignore_list() == set()
        assert get_cookie_ignore_list({}) == set()

    def test_comma_separated_string(self) -> None:
        config = {"rules": {"cookie": {"ignorelist": " _ga, _gid ,,AWSALB "}}}
        assert get_cookie_ignore_list(config) == {"_ga", "_gid", "AWSALB"}

    def test_list_of_names(self) -> None:
        config = {"rules": {"cookie": {"ignorelist": ["_ga", " JSESSIONID ", ""]}}}
        assert get_cookie_ignore_list(config) == {"_ga", "JSESSIONID"}

    def test_unexpected_type_ignored(self) -> None:
        assert get_cookie_ignore_list({"rules": {"cookie": {"ignorelist": 42}}}) == set()

    def test_env_overrides_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(IGNORE_LIST_ENV, "fromenv, other")
        config = {"rules": {"cookie": {"ignorelist": "fromfile"}}}
        assert get_cookie_ignore_list(config) == {"fromenv", "other"}


class TestLoadIgnoreList:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[rules.cookie]\nignorelist = ["_ga"]\n')
        assert load_ignore_list(path) == {"_ga"}

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_ignore_list(tmp_path / "missing.toml") == set()

    def test_broken_toml_falls_back(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[rules.cookie\nignorelist = ")
        with caplog.at_level("WARNING"):
            assert load_ignore_list(path) == set()
        assert "unreadable config" in caplog.text

    def test_unreadable_path_falls_back(self, tmp_path: Path) -> None:
        # a directory exists but cannot be opened as a file
        assert load_ignore_list(tmp_path) == set()

    def test_env_still_applies_when_file_broken(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "config.toml"
        path.write_text("not = [valid")
        monkeypatch.setenv(IGNORE_LIST_ENV, "_ga")
        assert load_ignore_list(path) == {"_ga"}
