from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from regen.cli import app


def invoke(*args: str) -> Any:
    return CliRunner().invoke(app, ["gen", *args])


def test_single_string(monkeypatch: Any) -> None:
    monkeypatch.delenv("REGEN_SEED", raising=False)
    result = invoke(r"#-\d{2,5}")
    assert result.exit_code == 0
    assert re.fullmatch(r"#-\d{2,5}\n", result.stdout)


def test_count_and_seed_are_reproducible() -> None:
    first = invoke("[a-z]{4,8}", "-n", "5", "--seed", "alpha")
    second = invoke("[a-z]{4,8}", "-n", "5", "--seed", "alpha")
    assert first.exit_code == 0
    assert first.stdout == second.stdout
    lines = first.stdout.splitlines()
    assert len(lines) == 5
    assert all(re.fullmatch("[a-z]{4,8}", line) for line in lines)


def test_separator() -> None:
    result = invoke("ab", "-n", "3", "--separator", ",")
    assert result.exit_code == 0
    assert result.stdout == "ab,ab,ab\n"


def test_unbound_max_option() -> None:
    result = invoke("x*", "-n", "20", "--unbound-max", "0")
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [""] * 20


def test_dotall_option() -> None:
    result = invoke("(.)", "--dotall", "--seed", "s")
    assert result.exit_code == 0


def test_secure_option() -> None:
    result = invoke("[0-9]{6}", "--secure")
    assert result.exit_code == 0
    assert re.fullmatch(r"[0-9]{6}\n", result.stdout)


def test_invalid_pattern() -> None:
    result = invoke("a(")
    assert result.exit_code == 2
    assert "invalid pattern" in result.stderr


def test_unsupported_pattern() -> None:
    assert invoke(r"(a)\1").exit_code == 2


def test_word_boundary_is_generation_error() -> None:
    result = invoke(r"\bword", "--verbose")
    assert result.exit_code == 5
    assert "UnsupportedNodeError" in result.stderr


def test_end_of_text_is_not_an_error_by_default() -> None:
    result = invoke("^hello$")
    assert result.exit_code == 0
    assert result.stdout == "hello\n"


def test_strict_mode_flags_early_stop() -> None:
    result = invoke("^hello$", "--strict")
    assert result.exit_code == 6
    assert result.stdout == "hello\n"


def test_bad_config(tmp_path: Path) -> None:
    bad_cfg = tmp_path / "bad.yml"
    bad_cfg.write_text("unknown: true\n", encoding="utf-8")
    assert invoke("abc", "--config", str(bad_cfg)).exit_code == 4


def test_seeded_config_without_seed(tmp_path: Path, monkeypatch: Any) -> None:
    monkeypatch.delenv("REGEN_SEED", raising=False)
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("random:\n  source: seeded\n", encoding="utf-8")
    result = invoke("abc", "--config", str(cfg))
    assert result.exit_code == 4
    assert "random.seed" in result.stderr


def test_config_strict_and_count(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("output:\n  count: 2\n  strict: true\n", encoding="utf-8")
    assert invoke("abc", "--config", str(cfg)).stdout == "abc\nabc\n"
    assert invoke("abc$", "--config", str(cfg)).exit_code == 6
    assert invoke("abc$", "--config", str(cfg), "--no-strict").exit_code == 0


def test_verbose_reports_progress() -> None:
    result = invoke("abc", "-v")
    assert result.exit_code == 0
    assert "Loaded config" in result.stderr
    assert "Generated 1 strings" in result.stderr


def test_env_seed_matches_seed_option(monkeypatch: Any) -> None:
    monkeypatch.delenv("REGEN_SEED", raising=False)
    from_option = invoke("[a-z]{10}", "--seed", "alpha")
    monkeypatch.setenv("REGEN_SEED", "alpha")
    from_env = invoke("[a-z]{10}")
    assert from_option.exit_code == from_env.exit_code == 0
    assert from_option.stdout == from_env.stdout
