"""
Main CLI application for covjobs.

Defines the Typer application structure and command routing; the commands
themselves are thin wrappers around the service layer.
"""
import typer

from covjobs.cli.commands.jobs import jobs_command


# Initialize Typer app
app = typer.Typer(help="covjobs - submit coverage reports to the Coveralls Jobs API")

# Register commands
app.command("jobs", help="Submit coverage to the Coveralls Jobs API v1.")(jobs_command)


# Add callback to make jobs the default command when no subcommand is specified
@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """covjobs - Coveralls Jobs API client.

    Run 'covjobs jobs' to collect clover coverage and submit it.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(
            jobs_command,
            config=".coveralls.yml",
            dry_run=False,
            exclude_no_stmt=False,
            verbose=False,
            env="prod",
            coverage_clover=None,
            json_path=None,
            entry_point=None,
            root_dir=".",
            insecure=False,
            timeout=None,
        )
