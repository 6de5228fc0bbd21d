"""Tests for environment-driven configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from datefilter.cli_paths import apply_path_overrides
from datefilter.config import BCE_ASTRONOMICAL, DEFAULT_STYLE_URL, Config


class TestConfig:
    def test_defaults(self, cfg: Config, tmp_path: Path) -> None:
        assert cfg.style_url == DEFAULT_STYLE_URL
        assert cfg.variable_prefix == "datefilter"
        assert cfg.bce_convention == BCE_ASTRONOMICAL
        assert not cfg.historical_bce
        assert cfg.http_timeout_s == 60
        assert cfg.logs_dir == (tmp_path / "logs").resolve()
        assert cfg.out_dir == (tmp_path / "data" / "out").resolve()

    def test_env_overrides(self, cfg: Config, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATEFILTER_STYLE_URL", " https://example.org/style.json ")
        monkeypatch.setenv("DATEFILTER_VARIABLE_PREFIX", "ohm")
        monkeypatch.setenv("DATEFILTER_BCE_CONVENTION", "Historical")
        monkeypatch.setenv("DATEFILTER_HTTP_TIMEOUT_S", "5")
        c = Config(repo_root=tmp_path)
        assert c.style_url == "https://example.org/style.json"
        assert c.variable_prefix == "ohm"
        assert c.historical_bce
        assert c.http_timeout_s == 5

    def test_allowed_style_urls(self, cfg: Config, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        assert cfg.allowed_style_urls == (DEFAULT_STYLE_URL,)
        monkeypatch.setenv("DATEFILTER_ALLOWED_STYLE_URLS", f"https://example.org/a.json,, {DEFAULT_STYLE_URL} ")
        c = Config(repo_root=tmp_path)
        assert c.allowed_style_urls == (DEFAULT_STYLE_URL, "https://example.org/a.json")

    def test_bad_bce_convention(self, cfg: Config, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATEFILTER_BCE_CONVENTION", "julian")
        with pytest.raises(ValueError, match="DATEFILTER_BCE_CONVENTION"):
            Config(repo_root=tmp_path)

    def test_bad_prefix(self, cfg: Config, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATEFILTER_VARIABLE_PREFIX", "my__prefix")
        with pytest.raises(ValueError):
            Config(repo_root=tmp_path)

    def test_explicit_dirs_win(self, cfg: Config, tmp_path: Path) -> None:
        c = Config(repo_root=tmp_path, logs_dir=tmp_path / "x", out_dir=tmp_path / "y")
        assert c.logs_dir == tmp_path / "x"
        assert c.out_dir == tmp_path / "y"


class TestApplyPathOverrides:
    def test_sets_env(self, cfg: Config, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATEFILTER_OUT_DIR", "")
        apply_path_overrides(logs_dir=str(tmp_path / "l"), out_dir=str(tmp_path / "o"), create_dirs=True)
        c = Config(repo_root=tmp_path)
        assert c.logs_dir == (tmp_path / "l").resolve()
        assert c.out_dir == (tmp_path / "o").resolve()
        assert c.out_dir.is_dir()

    def test_rejects_file(self, cfg: Config, tmp_path: Path) -> None:
        f = tmp_path / "file.txt"
        f.write_text("x", encoding="utf-8")
        with pytest.raises(ValueError, match="not a directory"):
            apply_path_overrides(logs_dir=str(f))
