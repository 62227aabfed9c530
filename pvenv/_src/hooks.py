# Before/after hooks for `pvenv virtualenv`.
#
# Other pyenv plugins drop `*.bash` files into the directories reported by
# `pyenv hooks virtualenv`. Each file registers shell fragments by calling
# `before_virtualenv '<fragment>'` or `after_virtualenv '<fragment>'`.
# Fragments run unsandboxed with the full run environment, and whatever
# they export is carried into the rest of the run.
import logging
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

from pvenv._src.constants import HOOK_COMMAND
from pvenv._src.exceptions import HookError
from pvenv._src.models.context import Hook, RunContext


logger = logging.getLogger(__name__)

_COLLECT_SCRIPT = """
exec 3>&1
before_virtualenv() { printf 'before\\0%s\\0' "$1" >&3; }
after_virtualenv() { printf 'after\\0%s\\0' "$1" >&3; }
source "$1" 1>&2
"""

_EXPORT_MARKER = "__PVENV_ENV__"


def _parse_env(raw: str) -> Dict[str, str]:
    environ = {}
    for entry in raw.split("\0"):
        if "=" in entry:
            key, value = entry.split("=", 1)
            environ[key] = value
    return environ


class ShellHook:
    def __init__(self, fragment: str, source: Optional[Path] = None):
        self.fragment = fragment
        self.source = source

    def __repr__(self):
        if self.source is None:
            return f"ShellHook({self.fragment!r})"
        return f"ShellHook({self.fragment!r}, source={str(self.source)!r})"

    def __call__(self, ctx: RunContext) -> None:
        script = f'{self.fragment}\nprintf "{_EXPORT_MARKER}"\nenv -0\n'
        logger.debug("running hook `%s` from %s", self.fragment, self.source or "<inline>")
        proc = subprocess.run(
            ["bash", "-c", script],
            env=ctx.hook_environ(),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
        if proc.stderr:
            sys.stderr.write(proc.stderr)
        if proc.returncode != 0:
            raise HookError(self.fragment, proc.returncode, proc.stderr.strip())

        output, marker, raw_env = proc.stdout.rpartition(_EXPORT_MARKER)
        if not marker:
            # fragment exited early, nothing to carry over
            print(proc.stdout, end="")
            return
        if output:
            print(output, end="")

        ignored = ("VIRTUALENV_NAME", "VIRTUALENV_PATH", "VERSION_NAME", "STATUS", "PWD", "SHLVL", "_")
        exported = _parse_env(raw_env)
        for key in ignored:
            exported.pop(key, None)
        ctx.env.clear()
        ctx.env.update(exported)


class HookList:
    def __init__(self, before: List[Hook] = None, after: List[Hook] = None):
        self.before = list(before or [])
        self.after = list(after or [])

    @classmethod
    def discover(cls, pyenv, command: str = HOOK_COMMAND) -> "HookList":
        hooks = cls()
        for directory in pyenv.hooks(command):
            for script in sorted(Path(directory).glob("*.bash")):
                hooks.load(script)
        return hooks

    def load(self, script: Path) -> None:
        """Collect the fragments `script` registers"""
        proc = subprocess.run(
            ["bash", "-c", _COLLECT_SCRIPT, "pvenv-hooks", str(script)],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
        if proc.returncode != 0:
            raise HookError(f"source {script}", proc.returncode, proc.stderr.strip())

        fields = proc.stdout.split("\0")
        for when, fragment in zip(fields[0::2], fields[1::2]):
            hook = ShellHook(fragment, source=script)
            if when == "before":
                self.before.append(hook)
            elif when == "after":
                self.after.append(hook)
        logger.debug("loaded hooks from %s", script)

    def run_before(self, ctx: RunContext) -> None:
        for hook in self.before:
            hook(ctx)

    def run_after(self, ctx: RunContext) -> None:
        for hook in self.after:
            hook(ctx)
