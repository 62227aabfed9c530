import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel


def _is_set(value: Optional[str]) -> bool:
    return bool(value) and value.lower() not in ("0", "false", "no", "off")


class Settings(BaseModel):
    """Configuration read from the environment of the calling shell"""
    root: Path
    cache_path: Path
    tmp_dir: Path
    debug: bool = False
    virtualenv_version: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, root: Optional[Path] = None):
        """Build settings from `environ` (defaults to `os.environ`).

        Parameters
        ----------
        environ : Mapping[str, str] | None
            Environment to read from
        root : Path | None
            Root reported by `pyenv root`, used when `PYENV_ROOT` is unset

        Returns
        -------
        Settings
        """
        if environ is None:
            environ = os.environ

        if environ.get("PYENV_ROOT"):
            root = Path(environ["PYENV_ROOT"])
        elif root is None:
            root = Path("~/.pyenv")
        root = root.expanduser()

        cache_path = environ.get("PYENV_VIRTUALENV_CACHE_PATH")
        cache_path = Path(cache_path).expanduser() if cache_path else root / "cache"

        tmp_dir = Path(environ.get("TMPDIR") or tempfile.gettempdir())

        return cls(
            root=root,
            cache_path=cache_path,
            tmp_dir=tmp_dir,
            debug=_is_set(environ.get("PYENV_DEBUG")),
            virtualenv_version=environ.get("VIRTUALENV_VERSION") or None,
        )
