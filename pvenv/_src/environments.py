import logging
import shutil
from pathlib import Path
from typing import Callable, Dict, List

from pvenv._src.constants import DELETE_PROMPT
from pvenv._src.exceptions import ConfirmationDeclined, NotAVirtualenvError
from pvenv._src.models.environment import VirtualenvInfo
from pvenv._src.prompt import confirmed


logger = logging.getLogger(__name__)


def read_pyvenv_cfg(path: Path) -> Dict[str, str]:
    """Parse the `key = value` lines of a `pyvenv.cfg` file"""
    config = {}
    for line in Path(path).read_text().splitlines():
        key, sep, value = line.partition("=")
        if sep:
            config[key.strip()] = value.strip()
    return config


def load_virtualenv(root: Path, name: str) -> VirtualenvInfo:
    path = Path(root) / "versions" / name
    cfg = path / "pyvenv.cfg"
    if not cfg.is_file():
        raise NotAVirtualenvError(name)

    config = read_pyvenv_cfg(cfg)
    home = config.get("home")
    return VirtualenvInfo(
        name=name,
        path=path,
        home=Path(home) if home else None,
        version=config.get("version") or config.get("version_info"),
    )


def list_virtualenvs(root: Path) -> List[VirtualenvInfo]:
    versions = Path(root) / "versions"
    if not versions.is_dir():
        return []
    return [
        load_virtualenv(root, entry.name)
        for entry in sorted(versions.iterdir())
        if (entry / "pyvenv.cfg").is_file()
    ]


def virtualenv_prefix(root: Path, name: str) -> Path:
    info = load_virtualenv(root, name)
    if info.prefix is None:
        raise NotAVirtualenvError(name)
    return info.prefix


def delete_virtualenv(pyenv, root: Path, name: str, force: bool, prompt: Callable[[str], str]) -> None:
    info = load_virtualenv(root, name)
    if not force:
        answer = prompt(DELETE_PROMPT.format(path=info.path))
        if not confirmed(answer):
            raise ConfirmationDeclined(info.path)

    logger.info("removing %s", info.path)
    shutil.rmtree(info.path)
    pyenv.rehash()
