"""Tests for the Data Converter CLI."""

import pytest
from click.testing import CliRunner

from tools.data_converter.cli import MODES, main
from tools.data_converter.formats import DataFormat


@pytest.fixture
def runner():
    return CliRunner()


class TestModes:
    """Test the mode code table."""

    def test_all_codes_present(self):
        """Test that every shorthand code is defined."""
        assert set(MODES) == {
            "yj", "yjp", "yt", "ytp",
            "jy", "jjp", "jt", "jtp",
            "ty", "tj", "tjp", "ttp",
            "y", "j", "jp", "t", "tp",
        }

    def test_pair_codes(self):
        """Test codes naming source and destination."""
        request = MODES["ytp"]

        assert request.source_format == DataFormat.YAML
        assert request.dest_format == DataFormat.TOML
        assert request.pretty is True

    def test_detecting_codes(self):
        """Test single-format codes leave the source to detection."""
        for code in ("y", "j", "jp", "t", "tp"):
            assert MODES[code].source_format is None

        assert MODES["jp"].dest_format == DataFormat.JSON
        assert MODES["jp"].pretty is True


class TestMain:
    """Test the data-convert command."""

    def test_stdin_to_stdout(self, runner):
        """Test converting standard input."""
        result = runner.invoke(main, ["jy"], input='{"a": 1, "b": [true, null]}')

        assert result.exit_code == 0
        assert "a: 1\nb:\n- true\n- null\n" in result.output

    def test_input_file(self, runner, tmp_path):
        """Test converting a named file."""
        path = tmp_path / "config.yaml"
        path.write_text("42: x\ntrue: y\n", encoding="utf-8")

        result = runner.invoke(main, ["yj", str(path)])

        assert result.exit_code == 0
        assert '{"42":"x","true":"y"}' in result.output

    def test_detect_pretty(self, runner):
        """Test a detecting pretty mode."""
        result = runner.invoke(main, ["jp"], input="[s]\nk = 1\n")

        assert result.exit_code == 0
        assert '{\n  "s": {\n    "k": 1\n  }\n}' in result.output

    def test_output_file(self, runner, tmp_path):
        """Test writing to an output file."""
        output = tmp_path / "out.toml"

        result = runner.invoke(main, ["jt", "--output", str(output)], input='{"a": {"b": 1}}')

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == "[a]\nb = 1\n"

    def test_parse_error(self, runner):
        """Test that parse errors exit non-zero."""
        result = runner.invoke(main, ["jy"], input="{bad")

        assert result.exit_code == 1
        assert "Failed to parse json" in result.output

    def test_unsupported_key(self, runner):
        """Test that unsupported keys exit non-zero."""
        result = runner.invoke(main, ["yj"], input="? [a, b]\n: 1\n")

        assert result.exit_code == 1
        assert "Unsupported key type" in result.output

    def test_unknown_mode(self, runner):
        """Test rejecting an unknown mode."""
        result = runner.invoke(main, ["xx"], input="{}")

        assert result.exit_code == 2

    def test_mode_is_case_sensitive(self, runner):
        """Test that mode codes must be lower case."""
        result = runner.invoke(main, ["YJ"], input="a: 1\n")

        assert result.exit_code == 2

    def test_missing_file(self, runner, tmp_path):
        """Test rejecting a missing input file."""
        result = runner.invoke(main, ["yj", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 2
