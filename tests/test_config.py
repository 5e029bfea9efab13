"""Tests for YAML config load/save and fallbacks."""
import tempfile
from pathlib import Path

import pytest

from src.cleaner import ProcessorConfig
from src.shared.config import AppConfig, Keybindings, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("READITNOW_VAULT", raising=False)
    monkeypatch.delenv("READITNOW_CONFIG", raising=False)


def test_config_load_save():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.yaml"
        original = AppConfig()
        original.save(path)

        loaded = AppConfig.load(path)
        assert loaded.vault_path == original.vault_path
        assert loaded.max_notes == original.max_notes
        assert loaded.excerpt_lines == original.excerpt_lines
        assert loaded.keybindings.quit == original.keybindings.quit
        assert loaded.processor == original.processor


def test_missing_config_writes_defaults():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "nested" / "config.yaml"
        config = load_config(path)
        assert config == AppConfig()
        assert path.exists()
        assert "keybindings:" in path.read_text()


def test_partial_config_keeps_defaults():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.yaml"
        path.write_text(
            "max_notes: 7\n"
            "keybindings:\n  quit: x\n"
            "processor:\n  max_line_length: 40\n  unknown_flag: true\n"
        )
        config = load_config(path)
        assert config.max_notes == 7
        assert config.excerpt_lines == 5
        assert config.keybindings == Keybindings(quit="x")
        assert config.processor == ProcessorConfig(max_line_length=40)


def test_invalid_config_falls_back_to_defaults():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.yaml"
        path.write_text("max_notes: [unclosed\n")
        assert load_config(path) == AppConfig()

        path.write_text("- just\n- a list\n")
        assert load_config(path) == AppConfig()

        path.write_text("processor:\n  max_line_length: -3\n")
        assert load_config(path) == AppConfig()


def test_config_values_are_type_checked():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.yaml"
        for bad in [
            "max_notes: ten\n",
            "max_notes: -1\n",
            "excerpt_lines: [1, 2]\n",
            "vault_path: null\n",
            "processor:\n  preserve_formatting: sometimes\n",
            "processor:\n  max_line_length: true\n",
        ]:
            path.write_text(bad)
            assert load_config(path) == AppConfig(), bad


def test_numeric_strings_are_coerced():
    config = AppConfig.from_dict({"max_notes": "10", "vault_path": 42})
    assert config.max_notes == 10
    assert config.vault_path == "42"


def test_vault_env_override(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setenv("READITNOW_VAULT", "/srv/inbox")
        config = load_config(Path(tmpdir) / "config.yaml")
        assert config.vault_path == "/srv/inbox"


def test_config_path_env(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "custom.yaml"
        AppConfig(max_notes=3).save(path)
        monkeypatch.setenv("READITNOW_CONFIG", str(path))
        assert load_config().max_notes == 3


def test_vault_dir_expands_home():
    assert not str(AppConfig(vault_path="~/notes").vault_dir).startswith("~")
