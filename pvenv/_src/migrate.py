import logging
import shutil
import sys
from pathlib import Path
from typing import Mapping, Optional

from pvenv._src.exceptions import SnapshotError
from pvenv._src.models.context import UpgradeSnapshot


logger = logging.getLogger(__name__)


def snapshot(
    pyenv,
    version: str,
    path: Path,
    tmp_dir: Path,
    env: Optional[Mapping[str, str]] = None,
    seed: Optional[str] = None,
) -> UpgradeSnapshot:
    """Freeze the packages of the virtualenv `version` and move it aside.

    The virtualenv at `path` is renamed to a sibling upgrade directory so
    a fresh one can be created in its place. Nothing is moved when the
    freeze fails.
    """
    snap = UpgradeSnapshot.for_path(path, tmp_dir, seed=seed)
    snap.manifest.parent.mkdir(parents=True, exist_ok=True)
    with open(snap.manifest, "w") as manifest:
        status = pyenv.exec(version, ["pip", "freeze"], env=env, stdout=manifest)
    if status != 0:
        snap.manifest.unlink()
        raise SnapshotError(version, status)

    Path(path).rename(snap.upgrade_path)
    logger.debug("moved %s to %s", path, snap.upgrade_path)
    return snap


def replay(
    pyenv,
    version: str,
    snap: UpgradeSnapshot,
    quiet: bool = False,
    verbose: bool = False,
    env: Optional[Mapping[str, str]] = None,
) -> int:
    """Reinstall the frozen packages into the new virtualenv `version`.

    On failure the manifest and the old virtualenv are left where they
    are, the user has to recover them by hand.
    """
    command = ["pip", "install"]
    if quiet:
        command.append("--quiet")
    if verbose:
        command.append("--verbose")
    command.extend(["--requirement", str(snap.manifest)])

    status = pyenv.exec(version, command, env=env)
    if status != 0:
        logger.error("failed to upgrade virtualenv `%s'", version)
        sys.stderr.write(f"old virtualenv kept at {snap.upgrade_path}\n")
        sys.stderr.write(f"package list kept at {snap.manifest}:\n")
        sys.stderr.write(Path(snap.manifest).read_text())
        return status

    Path(snap.manifest).unlink()
    shutil.rmtree(snap.upgrade_path)
    return 0
