"""tests for upgrading a virtualenv in place."""

from __future__ import annotations

from pathlib import Path

import pytest

from pvenv._src import migrate
from pvenv._src.exceptions import SnapshotError
from pvenv._src.hooks import HookList
from pvenv._src.pipeline import create_virtualenv


PACKAGES = ["click==8.1.7", "requests==2.32.3", "rich==13.7.1"]


def upgrade(fake_pyenv, settings, name: str = "venv") -> int:
    return create_virtualenv(
        ["-f", "--upgrade", "3.12.1", name],
        fake_pyenv,
        settings,
        hooks=HookList(),
        prompt=lambda _: "n",
    )


class TestSnapshot:
    """tests for migrate.snapshot."""

    def test_writes_manifest_and_moves_directory(self, fake_pyenv, settings, make_env) -> None:
        """Test that the package list is saved and the old env moved aside."""
        path = make_env("venv")
        fake_pyenv.packages["venv"] = PACKAGES

        snap = migrate.snapshot(fake_pyenv, "venv", path, settings.tmp_dir, seed="20240101000000.42")

        assert snap.manifest == settings.tmp_dir / "pvenv-requirements.20240101000000.42.txt"
        assert snap.manifest.read_text().split() == PACKAGES
        assert snap.upgrade_path == path.parent / "venv.upgrade.20240101000000.42"
        assert snap.upgrade_path.is_dir()
        assert not path.exists()

    def test_failed_freeze_leaves_env_alone(self, fake_pyenv, settings, make_env) -> None:
        """Test that nothing is moved when the package list cannot be read."""
        path = make_env("venv")
        fake_pyenv.failing.add("pip freeze")

        with pytest.raises(SnapshotError) as exc_info:
            migrate.snapshot(fake_pyenv, "venv", path, settings.tmp_dir, seed="1.2")

        assert exc_info.value.exit_code == 1
        assert path.is_dir()
        assert list(settings.tmp_dir.iterdir()) == []


class TestUpgrade:
    """tests for the upgrade path through the pipeline."""

    def test_restores_packages(self, fake_pyenv, settings, make_env) -> None:
        """Test that every frozen package is installed into the new env."""
        path = make_env("venv")
        fake_pyenv.packages["venv"] = list(PACKAGES)

        status = upgrade(fake_pyenv, settings)

        assert status == 0
        assert fake_pyenv.packages["venv"] == PACKAGES
        assert (path / "bin").is_dir()
        # temporary state is gone
        assert list(settings.tmp_dir.iterdir()) == []
        assert sorted(p.name for p in path.parent.iterdir()) == ["venv"]
        assert fake_pyenv.rehashed == 1

    def test_replay_failure_keeps_state(self, fake_pyenv, settings, make_env, capsys) -> None:
        """Test that a failed reinstall leaves manifest and old env behind."""
        path = make_env("venv")
        (path / "marker").write_text("old")
        fake_pyenv.packages["venv"] = list(PACKAGES)
        fake_pyenv.failing.add("pip install")

        status = upgrade(fake_pyenv, settings)

        assert status == 1
        (manifest,) = settings.tmp_dir.iterdir()
        assert manifest.read_text().split() == PACKAGES
        (old,) = [p for p in path.parent.iterdir() if p.name.startswith("venv.upgrade.")]
        assert (old / "marker").read_text() == "old"
        # the new env is not rolled back either
        assert path.is_dir()
        assert "requests==2.32.3" in capsys.readouterr().err
        assert fake_pyenv.rehashed == 0

    def test_backend_failure_keeps_snapshot(self, fake_pyenv, settings, make_env) -> None:
        """Test that a failed recreate never replays and keeps the old env."""
        make_env("venv")
        fake_pyenv.packages["venv"] = list(PACKAGES)
        fake_pyenv.failing.add("virtualenv")

        status = upgrade(fake_pyenv, settings)

        assert status == 1
        assert fake_pyenv.calls_to("pip")[-1].args == ["pip", "freeze"]
        assert len(list(settings.tmp_dir.iterdir())) == 1

    def test_upgrade_of_missing_env_skips_snapshot(self, fake_pyenv, settings) -> None:
        """Test that upgrading a new name is a plain create."""
        status = upgrade(fake_pyenv, settings, name="fresh")

        assert status == 0
        assert fake_pyenv.calls_to("pip") == []

    def test_failed_freeze_aborts_upgrade(self, fake_pyenv, settings, make_env) -> None:
        """Test that an unreadable package list stops before recreating."""
        path = make_env("venv")
        (path / "marker").write_text("old")
        fake_pyenv.packages["venv"] = list(PACKAGES)
        fake_pyenv.failing.add("pip freeze")

        with pytest.raises(SnapshotError):
            upgrade(fake_pyenv, settings)

        assert (path / "marker").read_text() == "old"
        assert sorted(p.name for p in path.parent.iterdir()) == ["venv"]
        assert fake_pyenv.calls_to("virtualenv") == []
        assert fake_pyenv.rehashed == 0
