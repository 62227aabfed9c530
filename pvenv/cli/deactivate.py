import typer
from typing_extensions import Annotated

from pvenv._src.deactivate import emit_deactivate


deactivate_command = typer.Typer(add_completion=False)


@deactivate_command.command()
def sh_deactivate(
    shell: Annotated[str, typer.Option(
        help="shell to emit code for, defaults to $PYENV_SHELL or $SHELL"
    )] = None,
):
    """Print shell code that deactivates the active virtualenv

    Meant to be evaluated by the calling shell.
    """
    typer.echo(emit_deactivate(shell), nl=False)


def main():
    deactivate_command()
