from typer.testing import CliRunner

import marked_asciidoctor
from marked_asciidoctor.ui.cli import app


def test_get_version_matches_public_api() -> None:
    assert marked_asciidoctor.get_version() == marked_asciidoctor.__version__
    assert isinstance(marked_asciidoctor.__version__, str)


def test_cli_version_flag() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0, result.stdout
    assert result.stdout.strip() == marked_asciidoctor.get_version()
