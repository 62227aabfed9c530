import typer

from pvenv._src.exceptions import PvenvError
from pvenv._src.pipeline import create_virtualenv
from pvenv.cli import runtime


# flags are parsed by pvenv itself, anything unknown goes to the backend
PASSTHROUGH = {"allow_extra_args": True, "ignore_unknown_options": True}

virtualenv_command = typer.Typer(add_completion=False)


@virtualenv_command.command(context_settings=PASSTHROUGH, add_help_option=False)
def virtualenv(ctx: typer.Context):
    """Create a Python virtualenv using the pyenv-installed Python

    Run with -h for the full usage.
    """
    pyenv, settings = runtime.load_runtime()
    try:
        status = create_virtualenv(ctx.args, pyenv, settings)
    except PvenvError as exc:
        runtime.fail(exc)
    raise typer.Exit(code=status)


def main():
    virtualenv_command()
