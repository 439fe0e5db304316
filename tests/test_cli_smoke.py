from typer.testing import CliRunner

from mdblocks.cli.cli import app

def test_cli_smoke():
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("outline", "blocks", "read", "tasks", "extract"):
        assert name in result.output
