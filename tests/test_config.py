from __future__ import annotations
import logging
from pathlib import Path

import pytest

from lineparse.config import (
    DEFAULT_DELIMITERS,
    Config,
    apply_env_overrides,
    load_config,
    validate_config,
)
from lineparse.types import UNLIMITED

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_defaults():
    cfg = Config()
    assert cfg.tokenizer.delimiters == list(DEFAULT_DELIMITERS)
    assert cfg.tokenizer.max_groups == UNLIMITED
    assert cfg.tokenizer.match_mode == "blend"
    assert cfg.numeric.format_style == "SI"
    assert cfg.numeric.default_base == 10
    assert cfg.numeric.strict_separators is True


def test_sections_are_not_shared():
    a, b = Config(), Config()
    a.tokenizer.delimiters.append(",")
    assert "," not in b.tokenizer.delimiters


def test_shipped_default_yaml_matches_model():
    cfg = load_config(REPO_ROOT / "configs" / "default.yaml")
    assert cfg.model_dump() == Config().model_dump()


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "nope.yaml").model_dump() == Config().model_dump()
    assert load_config(None).model_dump() == Config().model_dump()


def test_yaml_overrides(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text(
        "tokenizer:\n"
        "  delimiters: []\n"
        "  max_groups: 0\n"
        "  match_mode: complete\n"
        "numeric:\n"
        "  format_style: en\n"
        "  default_base: 16\n"
        "  true_args: [Oui, JA]\n"
        "  unknown_knob: 3\n",
        encoding="utf-8",
    )
    cfg = load_config(p)
    assert cfg.tokenizer.delimiters == list(DEFAULT_DELIMITERS)
    assert cfg.tokenizer.max_groups == UNLIMITED
    assert cfg.tokenizer.match_mode == "complete"
    assert cfg.numeric.format_style == "EN"
    assert cfg.numeric.default_base == 16
    assert cfg.numeric.true_args == ["oui", "ja"]


def test_invalid_yaml_raises_runtime_error(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("tokenizer: [unclosed\n", encoding="utf-8")
    with pytest.raises(RuntimeError):
        load_config(p)


def test_top_level_must_be_mapping(tmp_path):
    p = tmp_path / "list.yaml"
    p.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(RuntimeError):
        load_config(p)


def test_base_out_of_range(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("numeric:\n  default_base: 63\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(p)


def test_env_overrides():
    cfg = Config()
    apply_env_overrides(
        cfg,
        {
            "LINEPARSE_MAX_GROUPS": "3",
            "LINEPARSE_MATCH_MODE": "complete",
            "LINEPARSE_FORMAT_STYLE": " eu ",
            "LINEPARSE_BASE": "8",
            "LINEPARSE_STRICT_SEPARATORS": "off",
            "UNRELATED": "x",
        },
    )
    assert cfg.tokenizer.max_groups == 3
    assert cfg.tokenizer.match_mode == "complete"
    assert cfg.numeric.format_style == "EU"
    assert cfg.numeric.default_base == 8
    assert cfg.numeric.strict_separators is False


def test_bad_env_values_are_skipped(caplog):
    cfg = Config()
    with caplog.at_level(logging.WARNING, logger="lineparse.config"):
        apply_env_overrides(
            cfg,
            {
                "LINEPARSE_MAX_GROUPS": "lots",
                "LINEPARSE_BASE": "99",
                "LINEPARSE_FORMAT_STYLE": "US",
                "LINEPARSE_STRICT_SEPARATORS": "maybe",
            },
        )
    assert cfg.model_dump() == Config().model_dump()
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 4


def test_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("LINEPARSE_MAX_GROUPS", "-4")
    cfg = Config()
    apply_env_overrides(cfg)
    assert cfg.tokenizer.max_groups == UNLIMITED


def test_validate_config_overlap():
    cfg = Config()
    validate_config(cfg)
    cfg.numeric.true_args = ["no"]
    with pytest.raises(ValueError, match="no"):
        validate_config(cfg)
    cfg.numeric.true_args = ["ja"]
    cfg.numeric.false_args = ["JA"]
    with pytest.raises(ValueError):
        validate_config(cfg)


@pytest.mark.parametrize(
    "body",
    ["numeric:\n  format_style: US\n", "tokenizer:\n  match_mode: fuzzy\n"],
)
def test_literal_fields_reject_unknown_names(tmp_path, body):
    p = tmp_path / "cfg.yaml"
    p.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(p)
