from pathlib import Path

from scripts.lint_no_hex_in_charts import find_hex_literals, main

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_repository_sources_are_clean():
    roots = [REPO_ROOT / "analytics", REPO_ROOT / "charts", REPO_ROOT / "scripts"]
    assert find_hex_literals(roots) == []


def test_hex_literal_outside_tokens_is_reported(tmp_path):
    (tmp_path / "widget.py").write_text('COLOR = "#ff0000"\n', encoding="utf-8")
    (tmp_path / "tokens.py").write_text('ACCENT = "#00ff00"\n', encoding="utf-8")
    violations = find_hex_literals([tmp_path])
    assert len(violations) == 1
    assert "widget.py:1: #ff0000" in violations[0]


def test_main_exit_codes(tmp_path, capsys):
    clean = tmp_path / "clean.py"
    clean.write_text("x = 1  # comment\n", encoding="utf-8")
    assert main([str(clean)]) == 0

    dirty = tmp_path / "dirty.py"
    dirty.write_text("fill = '#abc'\n", encoding="utf-8")
    assert main([str(dirty)]) == 1
    assert "#abc" in capsys.readouterr().out
