import os
from pathlib import Path
from typing import Mapping, Optional

from pvenv._src.constants import DEACTIVATE_FISH, DEACTIVATE_POSIX


def detect_shell(environ: Optional[Mapping[str, str]] = None) -> str:
    if environ is None:
        environ = os.environ
    shell = environ.get("PYENV_SHELL") or environ.get("SHELL") or ""
    return Path(shell).name


def emit_deactivate(shell: Optional[str] = None) -> str:
    """Shell code that deactivates the current virtualenv when evaluated"""
    if shell is None:
        shell = detect_shell()
    if shell == "fish":
        return DEACTIVATE_FISH
    return DEACTIVATE_POSIX
