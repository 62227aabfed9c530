import typer
from typing_extensions import Annotated

from rich.table import Table
import rich

from pvenv._src.environments import delete_virtualenv, list_virtualenvs, virtualenv_prefix
from pvenv._src.exceptions import PvenvError
from pvenv._src.prompt import ask
from pvenv.cli import runtime
from pvenv.cli.deactivate import sh_deactivate
from pvenv.cli.virtualenv import PASSTHROUGH, virtualenv


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command(
    name="virtualenv",
    context_settings=PASSTHROUGH,
    add_help_option=False,
    rich_help_panel="Virtualenv",
)(virtualenv)

app.command(name="sh-deactivate", rich_help_panel="Shell")(sh_deactivate)


@app.command(name="virtualenvs", rich_help_panel="Virtualenv")
def virtualenvs(
    bare: bool = typer.Option(
        False,
        help="print names only, one per line"
    ),
):
    """List all virtualenvs found under $PYENV_ROOT/versions"""
    pyenv, settings = runtime.load_runtime()
    envs = list_virtualenvs(settings.root)

    if bare:
        for env in envs:
            print(env.name)
        return

    table = Table(title="Virtualenvs")
    table.add_column("name", justify="left", no_wrap=True)
    table.add_column("python", justify="left", no_wrap=True)
    table.add_column("created from", justify="left", no_wrap=True)

    for env in envs:
        table.add_row(env.name, env.version or "", str(env.prefix or ""))

    rich.print(table)


@app.command(name="virtualenv-prefix", rich_help_panel="Virtualenv")
def prefix(
    name: Annotated[str, typer.Argument(
        help="virtualenv to inspect, defaults to the active version"
    )] = None,
):
    """Print the prefix of the Python a virtualenv was created from"""
    pyenv, settings = runtime.load_runtime()
    if name is None:
        name = pyenv.version_name()
    try:
        print(virtualenv_prefix(settings.root, name))
    except PvenvError as exc:
        runtime.fail(exc)


@app.command(name="virtualenv-delete", rich_help_panel="Virtualenv")
def delete(
    name: Annotated[str, typer.Argument(
        help="virtualenv to delete"
    )],
    force: Annotated[bool, typer.Option(
        "--force", "-f",
        help="delete without asking"
    )] = False,
):
    """Uninstall a virtualenv"""
    pyenv, settings = runtime.load_runtime()
    try:
        delete_virtualenv(pyenv, settings.root, name, force=force, prompt=ask)
    except PvenvError as exc:
        runtime.fail(exc)
