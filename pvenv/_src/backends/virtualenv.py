from pvenv._src.backends.base import Backend
from pvenv._src.constants import BackendChoice


class VirtualenvBackend(Backend):
    """The third-party `virtualenv` tool, installed into the source version"""
    choice = BackendChoice.VIRTUALENV

    def is_available(self, pyenv, version):
        return pyenv.which("virtualenv", version) is not None

    def command(self, ctx):
        return ["virtualenv", *self.render_options(ctx), str(ctx.target.path)]
