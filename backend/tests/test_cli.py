"""
Trendkart - CLI Tests
"""

from click.testing import CliRunner

from trendkart.cli import cli


class TestCycleCommand:
    """Tests for the offline cycle command."""

    def test_runs_requested_cycles(self):
        result = CliRunner().invoke(cli, ["cycle", "--count", "3", "--seed", "1"])

        assert result.exit_code == 0, result.output
        assert "3 cycles complete" in result.output
        assert "Products" in result.output

    def test_region_filter(self):
        result = CliRunner().invoke(
            cli, ["cycle", "--count", "1", "--seed", "1", "--region", "India"]
        )

        assert result.exit_code == 0, result.output
        assert "India" in result.output

    def test_serve_help(self):
        result = CliRunner().invoke(cli, ["serve", "--help"])

        assert result.exit_code == 0
        assert "--port" in result.output
