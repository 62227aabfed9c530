import logging
from typing import Mapping, Optional

from pvenv._src.backends.base import Backend
from pvenv._src.constants import BackendChoice
from pvenv._src.exceptions import BackendInstallError


logger = logging.getLogger(__name__)


def detect_backend(pyenv, version: str, backends: Mapping[BackendChoice, Backend]) -> BackendChoice:
    """Pick the backend for `version`.

    venv only wins when it is there and virtualenv is not. With neither
    available this still answers virtualenv, which the caller installs.
    """
    has_virtualenv = backends[BackendChoice.VIRTUALENV].is_available(pyenv, version)
    if has_virtualenv:
        logger.debug("virtualenv found for %s", version)
        return BackendChoice.VIRTUALENV
    if backends[BackendChoice.VENV].is_available(pyenv, version):
        logger.debug("using venv module of %s", version)
        return BackendChoice.VENV
    return BackendChoice.VIRTUALENV


def install_virtualenv(
    pyenv,
    version: str,
    quiet: bool = False,
    verbose: bool = False,
    pin: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> None:
    """Install virtualenv into `version` with pip, raising on failure"""
    command = ["pip", "install"]
    if quiet:
        command.append("--quiet")
    if verbose:
        command.append("--verbose")
    command.append(f"virtualenv=={pin}" if pin else "virtualenv")

    logger.info("installing virtualenv into %s", version)
    status = pyenv.exec(version, command, env=env)
    if status != 0:
        raise BackendInstallError(command, status)
