import subprocess

from pvenv._src.backends.base import Backend
from pvenv._src.constants import BackendChoice


class VenvBackend(Backend):
    """The standard library `venv` module of the source version"""
    choice = BackendChoice.VENV
    unsupported = frozenset({"q", "quiet", "v", "verbose"})

    def is_available(self, pyenv, version):
        status = pyenv.exec(
            version,
            ["python", "-m", "venv", "--help"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        return status == 0

    def command(self, ctx):
        return ["python", "-m", "venv", *self.render_options(ctx), str(ctx.target.path)]
