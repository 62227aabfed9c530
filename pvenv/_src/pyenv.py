# Thin wrapper around the `pyenv` executable. Everything pvenv needs from
# the host version manager (root, current version, prefixes, hooks,
# rehash, exec) goes through this class so it can be swapped in tests.
import logging
import os
import subprocess
from pathlib import Path
from typing import IO, List, Mapping, Optional, Sequence, Union

from pvenv._src.exceptions import UsageError, VersionNotInstalledError


logger = logging.getLogger(__name__)


class Pyenv:
    def __init__(self, command: str = "pyenv", env: Optional[Mapping[str, str]] = None):
        self.command = command
        self.env = dict(os.environ if env is None else env)

    def _environ(self, version: Optional[str] = None, env: Optional[Mapping[str, str]] = None):
        environ = dict(self.env if env is None else env)
        if version is not None:
            environ["PYENV_VERSION"] = version
        return environ

    def run(
        self,
        *args: str,
        version: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
        stdout: Union[int, IO, None] = subprocess.PIPE,
        stderr: Union[int, IO, None] = None,
    ) -> subprocess.CompletedProcess:
        command = [self.command, *args]
        logger.debug("running `%s`", " ".join(command))
        if stderr is None and stdout == subprocess.PIPE:
            stderr = subprocess.PIPE
        return subprocess.run(
            command,
            env=self._environ(version, env),
            cwd=cwd,
            stdout=stdout,
            stderr=stderr,
            text=True,
        )

    def root(self) -> Optional[Path]:
        try:
            proc = self.run("root")
        except FileNotFoundError:
            return None
        if proc.returncode != 0:
            return None
        return Path(proc.stdout.strip())

    def version_name(self) -> str:
        """Name of the currently active version"""
        proc = self.run("version-name")
        name = proc.stdout.strip()
        if proc.returncode != 0 or not name:
            raise UsageError("pvenv: no active version, pass the source version explicitly")
        return name

    def prefix(self, version: str) -> Path:
        proc = self.run("prefix", version)
        lines = proc.stdout.strip().splitlines()
        if proc.returncode != 0 or not lines:
            raise VersionNotInstalledError(version)
        return Path(lines[0])

    def versions(self) -> List[str]:
        proc = self.run("versions", "--bare")
        return [line.strip() for line in proc.stdout.splitlines() if line.strip()]

    def hooks(self, command: str) -> List[Path]:
        """Directories other plugins registered hooks for `command` in"""
        proc = self.run("hooks", command)
        if proc.returncode != 0:
            return []
        return [Path(line) for line in proc.stdout.splitlines() if line.strip()]

    def which(self, command: str, version: str) -> Optional[Path]:
        proc = self.run("which", command, version=version)
        if proc.returncode != 0:
            return None
        return Path(proc.stdout.strip())

    def exec(
        self,
        version: str,
        args: Sequence[str],
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
        stdout: Union[int, IO, None] = None,
        stderr: Union[int, IO, None] = None,
    ) -> int:
        """Run `args` through `pyenv exec` and return the exit status.

        Output is passed through to the terminal unless `stdout` is given.
        """
        proc = self.run("exec", *args, version=version, env=env, cwd=cwd, stdout=stdout, stderr=stderr)
        return proc.returncode

    def rehash(self) -> None:
        self.run("rehash", stdout=None)
