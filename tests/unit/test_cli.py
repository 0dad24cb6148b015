"""Unit tests for the bootmap command-line interface."""

import ast
import json
import logging

import pytest
from click.testing import CliRunner

from bootmap.cli.main import cli
from bootmap.io.logging import LOGGER_NAME


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def detach_log_handlers():
    """Close handlers the CLI attached to the package logger."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def manifest_project(project_root):
    """Project root with a manifest next to it."""
    (project_root / "autoload-manifest.yaml").write_text(
        "files:\n"
        "  - boot.py\n"
        "map:\n"
        "  class:\n"
        "    Foo: src/Foo.py\n"
        "  function:\n"
        "    make_foo: src/helpers.py\n"
    )
    return project_root


class TestWriteCommand:
    """Tests for `bootmap write`."""

    def test_write_defaults(self, runner, manifest_project):
        """Test writing into the default vendor directory."""
        result = runner.invoke(cli, ["write", "--root", str(manifest_project)], obj={})
        assert result.exit_code == 0, result.output
        artifact = manifest_project / "vendor" / "autoload.py"
        assert artifact.exists()
        assert (manifest_project / "vendor" / "hh_autoload.py").exists()
        assert "2 symbols, 1 files" in result.output
        assert "_IS_DEV = True" in artifact.read_text()

    def test_prod_and_handler_options(self, runner, manifest_project):
        """Test command-line options reach the generated module."""
        result = runner.invoke(
            cli,
            [
                "write",
                "--root", str(manifest_project),
                "--prod",
                "--failure-handler", "tests.fixtures.handlers.RecordingHandler",
            ],
            obj={},
        )
        assert result.exit_code == 0, result.output
        source = (manifest_project / "vendor" / "autoload.py").read_text()
        assert "_IS_DEV = False" in source
        assert "import RecordingHandler as _FailureHandler" in source

    def test_project_config_and_absolute_root(self, runner, manifest_project, tmp_path):
        """Test bootmap.yaml settings and --absolute-root."""
        (manifest_project / "bootmap.yaml").write_text("output_dir: build\nlegacy_shims: []\n")
        result = runner.invoke(
            cli, ["write", "--root", str(manifest_project), "--absolute-root"], obj={}
        )
        assert result.exit_code == 0, result.output
        out_dir = manifest_project / "build"
        assert sorted(p.name for p in out_dir.iterdir()) == ["autoload.py"]
        assert "__file__" not in (out_dir / "autoload.py").read_text()

    def test_record(self, runner, manifest_project, tmp_path):
        """Test --record appends a JSON line describing the emission."""
        record = tmp_path / "records.jsonl"
        args = ["write", "--root", str(manifest_project), "--record", str(record)]
        assert runner.invoke(cli, args, obj={}).exit_code == 0
        assert runner.invoke(cli, args, obj={}).exit_code == 0

        lines = [json.loads(line) for line in record.read_text().splitlines()]
        assert len(lines) == 2
        assert lines[0]["symbol_count"] == 2
        assert lines[0]["build_id"] != lines[1]["build_id"]

    def test_outside_root_fails(self, runner, manifest_project, tmp_path):
        """Test a path error exits non-zero with a message."""
        stray = tmp_path / "stray.py"
        stray.write_text("")
        (manifest_project / "autoload-manifest.yaml").write_text(f"files:\n  - {stray}\n")
        result = runner.invoke(cli, ["write", "--root", str(manifest_project)], obj={})
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "not inside root" in result.output
        assert not (manifest_project / "vendor").exists()

    def test_missing_manifest_fails(self, runner, project_root):
        """Test a project without a manifest exits non-zero."""
        result = runner.invoke(cli, ["write", "--root", str(project_root)], obj={})
        assert result.exit_code == 1
        assert "Manifest not found" in result.output

    def test_invalid_handler_fails(self, runner, manifest_project):
        """Test a malformed handler name exits non-zero."""
        result = runner.invoke(
            cli,
            ["write", "--root", str(manifest_project), "--failure-handler", "NotDotted"],
            obj={},
        )
        assert result.exit_code == 1
        assert "NotDotted" in result.output

    def test_log_file(self, runner, manifest_project, tmp_path):
        """Test --log-file captures INFO messages without -v."""
        log_file = tmp_path / "logs" / "write.log"
        result = runner.invoke(
            cli,
            ["write", "--root", str(manifest_project), "--log-file", str(log_file)],
            obj={},
        )
        assert result.exit_code == 0, result.output
        content = log_file.read_text()
        assert "| INFO |" in content
        assert "autoload.py" in content
        assert "Wrote legacy shims" in content

    def test_timestamped_log_file(self, runner, manifest_project, tmp_path):
        """Test --timestamp-log writes to a new timestamped file."""
        args = [
            "write",
            "--root", str(manifest_project),
            "--log-file", str(tmp_path / "write.log"),
            "--timestamp-log",
        ]
        result = runner.invoke(cli, args, obj={})
        assert result.exit_code == 0, result.output
        assert not (tmp_path / "write.log").exists()
        written = list(tmp_path.glob("write_*.log"))
        assert len(written) == 1
        assert "Wrote" in written[0].read_text()


class TestShowCommand:
    """Tests for `bootmap show`."""

    def test_show_renders_module(self, runner, manifest_project):
        """Test show prints the module without writing it."""
        result = runner.invoke(cli, ["show", "--root", str(manifest_project)], obj={})
        assert result.exit_code == 0, result.output
        assert "def initialize() -> None:" in result.output
        assert not (manifest_project / "vendor").exists()

    def test_show_map_only(self, runner, manifest_project):
        """Test --map-only prints the resolved map literal."""
        result = runner.invoke(
            cli, ["show", "--root", str(manifest_project), "--map-only"], obj={}
        )
        assert result.exit_code == 0, result.output
        assert ast.literal_eval(result.output) == {
            "class": {"Foo": "src/Foo.py"},
            "function": {"make_foo": "src/helpers.py"},
        }
