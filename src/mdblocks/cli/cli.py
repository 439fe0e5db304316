"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdblocks.cli.commands import blocks_cmd, extract_cmd, outline_cmd, read_cmd, tasks_cmd


app = typer.Typer(name="mdblocks", no_args_is_help=True, help="Markdown block outlines: keys, line ranges, tasks")

app.command(name="outline")(outline_cmd)
app.command(name="blocks")(blocks_cmd)
app.command(name="read")(read_cmd)
app.command(name="tasks")(tasks_cmd)
app.command(name="extract")(extract_cmd)
