# Backends are the external tools that actually build a virtualenv.
# pvenv only decides which one to run and with which options.
from pvenv._src.backends.base import Backend
from pvenv._src.backends.venv import VenvBackend
from pvenv._src.backends.virtualenv import VirtualenvBackend


def default_backends():
    return {backend.choice: backend for backend in (VirtualenvBackend(), VenvBackend())}


__all__ = ["Backend", "VenvBackend", "VirtualenvBackend", "default_backends"]
