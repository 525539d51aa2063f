import pytest
from typer.testing import CliRunner

from vdisk.cli import app

runner = CliRunner()


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "vdisk.log"


def invoke(log_file, *args):
    result = runner.invoke(app, ["--log-file", str(log_file), *args])
    print(result.output)
    return result


def test_help():
    """Test the help command displays usage information."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Usage" in result.output
    for command in ("demo", "run", "serve"):
        assert command in result.output


def test_demo(log_file):
    result = invoke(log_file, "demo")
    assert result.exit_code == 0
    assert "Demo finished with 0 failed step(s)." in result.output
    assert "Contents: huhu" in result.output
    assert "Contents: huuuuuuuuuuuuuuuuuuuuu" in result.output
    assert "pwd: /aaa/bbb" in result.output
    assert "Storage deleted (3 folders, 0 files released)" in result.output


def test_demo_writes_log(log_file):
    invoke(log_file, "demo")
    text = log_file.read_text()
    assert "Created folder /aaa" in text
    assert "Deleted folder /ccc" in text
    assert text.count("Storage deleted") == 1
    assert "Storage deleted: released 3 folders, 0 files" in text


def test_run_script_reports_failures(tmp_path, log_file):
    script = tmp_path / "script.yaml"
    script.write_text(
        "- op: mkdir\n"
        "  name: aaa\n"
        "- op: mkdir\n"
        "  name: aaa\n"
        "- op: cd\n"
        "  path: missing\n"
        "- op: touch\n"
        "  name: notes.txt\n"
        "  content: hello\n"
        "- op: cat\n"
        "  name: notes.txt\n"
    )
    result = invoke(log_file, "run", str(script))
    assert result.exit_code == 0
    assert "Ran 5 step(s), 2 failed." in result.output
    assert "already exists" in result.output
    assert "Contents: hello" in result.output


def test_run_strict_exit_code(tmp_path, log_file):
    script = tmp_path / "script.json"
    script.write_text('[{"op": "rm", "name": "missing"}]')
    result = invoke(log_file, "run", "--strict", str(script))
    assert result.exit_code == 1


def test_run_strict_success(tmp_path, log_file):
    script = tmp_path / "script.yaml"
    script.write_text("- op: mkdir\n  name: aaa\n- op: ls\n")
    result = invoke(log_file, "run", "--strict", str(script))
    assert result.exit_code == 0
    assert "aaa" in result.output


def test_run_missing_script(tmp_path, log_file):
    result = invoke(log_file, "run", str(tmp_path / "nope.yaml"))
    assert result.exit_code == 2
    assert "Failed to load script" in result.output


def test_run_invalid_step(tmp_path, log_file):
    script = tmp_path / "script.yaml"
    script.write_text("- op: format\n")
    result = invoke(log_file, "run", str(script))
    assert result.exit_code == 2


def test_invalid_log_level(log_file):
    result = invoke(log_file, "--log-level", "chatty", "demo")
    assert result.exit_code == 2
    assert "Failed to load settings" in result.output
