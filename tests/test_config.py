import pytest

from fitmark.config import Config, load_config
from fitmark.options import ThresholdType


def test_env_override(monkeypatch, tmp_path):
    cfg_file = tmp_path / "cfg.yaml"
    cfg_file.write_text("pruning:\n  threshold: 0.3\n  threshold_type: Dynamic\n", encoding="utf-8")
    monkeypatch.setenv("FITMARK_PRUNING__THRESHOLD", "0.6")
    config = load_config(cfg_file)
    assert config.pruning.threshold == 0.6
    assert config.pruning.threshold_type is ThresholdType.DYNAMIC


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "missing.yaml") == Config()


def test_bm25_section_and_filter_choice(monkeypatch, tmp_path):
    cfg_file = tmp_path / "cfg.yaml"
    cfg_file.write_text("content_filter: bm25\nbm25:\n  user_query: ${TOPIC}\n  use_stemming: false\n", encoding="utf-8")
    monkeypatch.setenv("TOPIC", "solar power")
    config = load_config(cfg_file)
    assert config.content_filter == "bm25"
    assert config.bm25.user_query == "solar power"
    assert config.bm25.use_stemming is False


def test_env_can_disable_filter(monkeypatch, tmp_path):
    monkeypatch.setenv("FITMARK_CONTENT_FILTER", "none")
    assert load_config(tmp_path / "missing.yaml").content_filter == "none"


def test_unknown_keys_rejected(tmp_path):
    cfg_file = tmp_path / "cfg.yaml"
    cfg_file.write_text("markdown:\n  colour: blue\n", encoding="utf-8")
    with pytest.raises(ValueError, match="colour"):
        load_config(cfg_file)
