"""
shared fixtures for pvenv tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from pvenv._src.exceptions import VersionNotInstalledError
from pvenv._src.settings import Settings


@dataclass
class Call:
    version: str
    args: list[str]
    env: dict[str, str]
    cwd: Path | None


@dataclass
class FakePyenv:
    """in-process stand-in for the pyenv executable.

    `virtualenv` and `python -m venv` create a directory with `bin/` and
    `pyvenv.cfg`, `pip freeze` / `pip install` read and write `packages`.
    anything listed in `failing` exits with status 1.
    """

    root_path: Path
    current: str = "3.12.1"
    installed: list[str] = field(default_factory=lambda: ["3.11.9", "3.12.1"])
    env: dict[str, str] = field(default_factory=dict)
    available: set[str] = field(default_factory=lambda: {"virtualenv"})
    has_venv: bool = True
    failing: set[str] = field(default_factory=set)
    packages: dict[str, list[str]] = field(default_factory=dict)
    calls: list[Call] = field(default_factory=list)
    rehashed: int = 0

    def root(self) -> Path:
        return self.root_path

    def version_name(self) -> str:
        return self.current

    def prefix(self, version: str) -> Path:
        if version not in self.installed:
            raise VersionNotInstalledError(version)
        return self.root_path / "versions" / version

    def versions(self) -> list[str]:
        return list(self.installed)

    def hooks(self, command: str) -> list[Path]:
        return []

    def which(self, command: str, version: str) -> Path | None:
        if command in self.available:
            return Path("/fake/bin") / command
        return None

    def rehash(self) -> None:
        self.rehashed += 1

    def calls_to(self, command: str) -> list[Call]:
        return [call for call in self.calls if call.args[0] == command]

    def exec(self, version, args, env=None, cwd=None, stdout=None, stderr=None) -> int:
        args = list(args)
        self.calls.append(Call(version, args, dict(env or {}), cwd))

        if args[0] in self.failing or " ".join(args[:2]) in self.failing:
            if args[0] in ("virtualenv", "python") and "--help" not in args:
                # half-created target
                Path(args[-1]).mkdir(parents=True, exist_ok=True)
            return 1

        if args[0] == "virtualenv":
            return self._create(version, Path(args[-1]))
        if args[:3] == ["python", "-m", "venv"]:
            if "--help" in args:
                return 0 if self.has_venv else 1
            return self._create(version, Path(args[-1]))
        if args[:2] == ["pip", "freeze"]:
            stdout.write("".join(f"{pkg}\n" for pkg in self.packages.get(version, [])))
            return 0
        if args[:2] == ["pip", "install"]:
            if "--requirement" in args:
                manifest = Path(args[args.index("--requirement") + 1])
                self.packages[version] = manifest.read_text().split()
            else:
                self.available.add("virtualenv")
            return 0
        return 127

    def _create(self, version: str, path: Path) -> int:
        (path / "bin").mkdir(parents=True, exist_ok=True)
        home = self.root_path / "versions" / version / "bin"
        (path / "pyvenv.cfg").write_text(f"home = {home}\nversion = {version}\n")
        self.packages[path.name] = []
        return 0


@pytest.fixture
def pyenv_root(tmp_path: Path) -> Path:
    root = tmp_path / "pyenv"
    (root / "versions").mkdir(parents=True)
    return root


@pytest.fixture
def fake_pyenv(pyenv_root: Path) -> FakePyenv:
    return FakePyenv(root_path=pyenv_root)


@pytest.fixture
def settings(tmp_path: Path, pyenv_root: Path) -> Settings:
    return Settings(
        root=pyenv_root,
        cache_path=pyenv_root / "cache",
        tmp_dir=tmp_path / "tmp",
    )


@pytest.fixture
def make_env(pyenv_root: Path):
    """create what looks like a populated virtualenv under the pyenv root."""

    def _make(name: str, version: str = "3.12.1") -> Path:
        path = pyenv_root / "versions" / name
        (path / "bin").mkdir(parents=True)
        home = pyenv_root / "versions" / version / "bin"
        (path / "pyvenv.cfg").write_text(f"home = {home}\nversion = {version}\n")
        return path

    return _make
