from enum import Enum


HOOK_COMMAND = "virtualenv"

# variables the backend must not inherit from the caller
UNSET_BEFORE_DELEGATION = (
    "PIP_REQUIRE_VENV",
    "PIP_REQUIRE_VIRTUALENV",
    "PYENV_VERSION",
)

CONFIRM_PROMPT = "pvenv: {path} already exists\ncontinue with installation? (y/N)"

DELETE_PROMPT = "pvenv: remove {path}? (y/N)"

USAGE = """\
Usage: pvenv virtualenv [-f|--force] [-u|--upgrade] [VIRTUALENV_OPTIONS] [version] <virtualenv-name>
       pvenv virtualenv --version
       pvenv virtualenv --help

  -u/--upgrade     Reinstall the installed packages
                   into the new environment
  -f/--force       Install even if the virtualenv appears to be installed
                   already
  -p/--python      Python interpreter passed on to virtualenv
  -q/--quiet       Less output from the backend
  -v/--verbose     More output from the backend
"""

DEACTIVATE_FISH = """\
functions -q deactivate; and deactivate;
set -e PYENV_VERSION;
"""

DEACTIVATE_POSIX = """\
declare -f deactivate 1>/dev/null 2>&1 && deactivate;
unset PYENV_VERSION;
"""


class BackendChoice(str, Enum):
    VIRTUALENV = "virtualenv"
    VENV = "venv"
