from pathlib import Path
from typing import FrozenSet, List

from pvenv._src.constants import BackendChoice
from pvenv._src.models.context import RunContext
from pvenv._src.options import format_option


class Backend:
    choice: BackendChoice
    # flags the backend does not understand, stripped before invocation
    unsupported: FrozenSet[str] = frozenset()

    def is_available(self, pyenv, version: str) -> bool:
        raise NotImplementedError

    def supports_option(self, flag: str) -> bool:
        return flag not in self.unsupported

    def command(self, ctx: RunContext) -> List[str]:
        raise NotImplementedError

    def create(self, pyenv, ctx: RunContext, cwd: Path) -> int:
        """Build the virtualenv at `ctx.target.path` and return the exit status"""
        return pyenv.exec(ctx.version, self.command(ctx), env=ctx.env, cwd=cwd)

    def filter_options(self, options):
        return [opt for opt in options if self.supports_option(opt)]

    def render_options(self, ctx: RunContext) -> List[str]:
        return [format_option(opt) for opt in ctx.backend_options]
