from typing import Tuple

import typer

from pvenv._src.exceptions import PvenvError
from pvenv._src.log import setup_logging
from pvenv._src.pyenv import Pyenv
from pvenv._src.settings import Settings


def load_runtime() -> Tuple[Pyenv, Settings]:
    """Build the pyenv client and settings for one command"""
    pyenv = Pyenv()
    root = None if pyenv.env.get("PYENV_ROOT") else pyenv.root()
    settings = Settings.from_env(pyenv.env, root=root)
    setup_logging(settings.debug)
    return pyenv, settings


def fail(exc: PvenvError):
    typer.echo(exc.msg, err=True)
    raise typer.Exit(code=exc.exit_code)
