"""
Tests for the contracheck command line
"""

import json

import pytest
from contracheck.cli import json_path_for, main

CLEAN = "from contracheck import contract\n\n\n@contract('null -> null')\ndef f(x):\n    return x\n"
BROKEN = "from contracheck import contract\n\n\n@contract('null -> null')\ndef f(n: int) -> int:\n    return n\n"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("CONTRACHECK_MAX_REGIONS", raising=False)
    monkeypatch.delenv("CONTRACHECK_LOG_LEVEL", raising=False)


def test_clean_file_exits_zero(tmp_path, capsys):
    path = tmp_path / "clean.py"
    path.write_text(CLEAN, encoding="utf-8")

    assert main(["check", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Functions checked: 1" in out
    assert "✅ Clean: 1" in out


def test_problems_exit_one(tmp_path, capsys):
    path = tmp_path / "broken.py"
    path.write_text(BROKEN, encoding="utf-8")

    assert main(["check", str(path)]) == 1
    assert "type-mismatch" in capsys.readouterr().out


def test_directory_and_json_reports(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.py").write_text(CLEAN, encoding="utf-8")
    (src / "b.py").write_text(BROKEN, encoding="utf-8")
    output = tmp_path / "report.json"

    assert main(["check", str(src), "--json", str(output)]) == 1
    reports = sorted(tmp_path.glob("report.*.json"))
    assert len(reports) == 2
    assert json.loads(reports[0].read_text(encoding="utf-8"))["summary"]["clean"] == 1


def test_single_json_report(tmp_path):
    path = tmp_path / "clean.py"
    path.write_text(CLEAN, encoding="utf-8")
    output = tmp_path / "out.json"

    assert main(["check", str(path), "--json", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8"))["summary"]["total_functions"] == 1


def test_nullability_facts(tmp_path):
    path = tmp_path / "clean.py"
    path.write_text(CLEAN, encoding="utf-8")
    facts = tmp_path / "facts.json"
    facts.write_text(json.dumps({"f": ["x"]}), encoding="utf-8")

    assert main(["check", str(path), "--nullability", str(facts)]) == 1


def test_invalid_nullability_facts(tmp_path, capsys):
    path = tmp_path / "clean.py"
    path.write_text(CLEAN, encoding="utf-8")
    facts = tmp_path / "facts.json"
    facts.write_text("[1, 2]", encoding="utf-8")

    assert main(["check", str(path), "--nullability", str(facts)]) == 2
    assert "Error" in capsys.readouterr().out


def test_missing_file_fails(tmp_path):
    assert main(["check", str(tmp_path / "missing.py")]) == 1


def test_empty_directory(tmp_path, capsys):
    assert main(["check", str(tmp_path)]) == 0
    assert "No Python files found" in capsys.readouterr().out


def test_json_path_for():
    assert json_path_for(None, "a.py", True) is None
    assert json_path_for("out.json", "a.py", False) == "out.json"
    assert json_path_for("out.json", "src/a.py", True) == "out.src_a.json"


def test_undecodable_file_does_not_stop_the_run(tmp_path, capsys):
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.py").write_bytes(b"x = '\xff'\n")
    (src / "b.py").write_text(CLEAN, encoding="utf-8")

    assert main(["check", str(src)]) == 1
    out = capsys.readouterr().out
    assert "Could not load file" in out
    assert "Functions checked: 1" in out


def test_remote_check_reports_undecodable_file(tmp_path, capsys, monkeypatch):
    from contracheck.server import remote

    bad = tmp_path / "a.py"
    bad.write_bytes(b"x = '\xff'\n")
    monkeypatch.setattr(remote.RemoteContractClient, "check_source",
                        lambda self, source, filename: pytest.fail("unreadable file was sent"))

    assert main(["check", str(bad), "--server", "http://localhost:1"]) == 1
    assert "Could not load" in capsys.readouterr().out


@pytest.mark.parametrize("value", ["0", "-3", "many"])
def test_max_regions_must_be_positive(tmp_path, value):
    path = tmp_path / "clean.py"
    path.write_text(CLEAN, encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["check", str(path), "--max-regions", value])
    assert exc.value.code == 2


def test_max_regions_is_passed_through(tmp_path, capsys):
    path = tmp_path / "flags.py"
    path.write_text(
        "from contracheck import contract\n\n\n"
        "@contract('true -> true; false -> false')\n"
        "def f(x: bool) -> bool:\n"
        "    return x\n",
        encoding="utf-8")

    assert main(["check", str(path), "--max-regions", "1"]) == 0
    assert "not tracked past clause #1" in capsys.readouterr().out
