import os
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, Field

from pvenv._src.constants import BackendChoice
from pvenv._src.models.options import ParsedOptions


class TargetEnvironment(BaseModel):
    """The virtualenv being created

    `pre_existing` is recorded before anything touches the filesystem
    and decides whether a failed run may remove `path`.
    """
    name: str
    path: Path
    pre_existing: bool = False

    @classmethod
    def at(cls, root: Path, name: str) -> "TargetEnvironment":
        path = Path(root) / "versions" / name
        return cls(name=name, path=path, pre_existing=path.exists())

    @property
    def populated(self) -> bool:
        return (self.path / "bin").is_dir()


def make_seed() -> str:
    return f"{time.strftime('%Y%m%d%H%M%S')}.{os.getpid()}"


class UpgradeSnapshot(BaseModel):
    """Temporary state kept while an environment is upgraded in place"""
    seed: str
    manifest: Path
    upgrade_path: Path

    @classmethod
    def for_path(cls, path: Path, tmp_dir: Path, seed: Optional[str] = None):
        seed = seed or make_seed()
        path = Path(path)
        return cls(
            seed=seed,
            manifest=Path(tmp_dir) / f"pvenv-requirements.{seed}.txt",
            upgrade_path=path.with_name(f"{path.name}.upgrade.{seed}"),
        )


class RunContext(BaseModel):
    """State threaded through every stage of a `pvenv virtualenv` run

    Hooks receive this object and may mutate `env`, which is the
    environment every later child process is started with.
    """
    parsed: ParsedOptions
    version: str
    target: TargetEnvironment
    backend: BackendChoice = BackendChoice.VIRTUALENV
    backend_options: List[str] = Field(default_factory=list)
    env: Dict[str, str] = Field(default_factory=dict)
    snapshot: Optional[UpgradeSnapshot] = None
    status: int = 0

    @property
    def force(self) -> bool:
        return self.parsed.has("f", "force")

    @property
    def upgrade(self) -> bool:
        return self.parsed.has("u", "upgrade")

    @property
    def quiet(self) -> bool:
        return self.parsed.has("q", "quiet")

    @property
    def verbose(self) -> bool:
        return self.parsed.has("v", "verbose")

    def hook_environ(self) -> Dict[str, str]:
        environ = dict(self.env)
        environ.update(
            VIRTUALENV_NAME=self.target.name,
            VIRTUALENV_PATH=str(self.target.path),
            VERSION_NAME=self.version,
            STATUS=str(self.status),
        )
        return environ


Hook = Callable[[RunContext], None]
