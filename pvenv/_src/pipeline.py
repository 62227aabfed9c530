# `pvenv virtualenv`: resolve the source version and the target, pick a
# backend, confirm, run hooks around the backend, migrate packages on
# upgrade, then rehash or clean up.
import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

from pvenv import __version__
from pvenv._src.backends import Backend, default_backends
from pvenv._src.backends.detect import detect_backend, install_virtualenv
from pvenv._src.constants import BackendChoice, CONFIRM_PROMPT, UNSET_BEFORE_DELEGATION, USAGE
from pvenv._src.exceptions import ConfirmationDeclined, UsageError, VersionNotInstalledError
from pvenv._src.hooks import HookList
from pvenv._src import migrate
from pvenv._src.models.context import RunContext, TargetEnvironment
from pvenv._src.models.options import ParsedOptions
from pvenv._src.options import parse_options
from pvenv._src.prompt import ask, confirmed
from pvenv._src.settings import Settings


logger = logging.getLogger(__name__)

# flags pvenv handles itself and never forwards
OWN_FLAGS = ("f", "force", "u", "upgrade", "h", "help", "version", "p", "python")


def init_context(parsed: ParsedOptions, pyenv, settings: Settings) -> RunContext:
    """Turn parsed arguments into a `RunContext` with a verified source version"""
    arguments = list(parsed.arguments)
    backend_options = [opt for opt in parsed.options if opt not in OWN_FLAGS]

    if parsed.has("p", "python"):
        if not arguments:
            raise UsageError(USAGE)
        backend_options.append(f"python={arguments.pop(0)}")

    if not arguments:
        raise UsageError(USAGE)

    if len(arguments) == 1:
        version = pyenv.version_name()
    else:
        version = arguments[0]
    name = Path(arguments[-1]).name
    if not name:
        raise UsageError(USAGE)

    try:
        pyenv.prefix(version)
    except VersionNotInstalledError as exc:
        raise UsageError(f"{exc.msg}\n\n{USAGE}") from exc

    env = {k: v for k, v in pyenv.env.items() if k not in UNSET_BEFORE_DELEGATION}

    return RunContext(
        parsed=parsed,
        version=version,
        target=TargetEnvironment.at(settings.root, name),
        backend_options=backend_options,
        env=env,
    )


def prepare_backend(ctx: RunContext, pyenv, settings: Settings, backends: Mapping[BackendChoice, Backend]) -> Backend:
    ctx.backend = detect_backend(pyenv, ctx.version, backends)
    backend = backends[ctx.backend]

    if ctx.backend == BackendChoice.VENV:
        ctx.backend_options = backend.filter_options(ctx.backend_options)
        if ctx.upgrade:
            ctx.backend_options.append("upgrade")
        return backend

    if not backend.is_available(pyenv, ctx.version):
        install_virtualenv(
            pyenv,
            ctx.version,
            quiet=ctx.quiet,
            verbose=ctx.verbose,
            pin=settings.virtualenv_version,
            env=ctx.env,
        )
        ctx.backend = detect_backend(pyenv, ctx.version, backends)
        backend = backends[ctx.backend]
    return backend


def confirm(ctx: RunContext, prompt: Callable[[str], str]) -> None:
    if ctx.target.populated and not ctx.force:
        if not confirmed(prompt(CONFIRM_PROMPT.format(path=ctx.target.path))):
            raise ConfirmationDeclined(ctx.target.path)


def _remove_if_new(target: TargetEnvironment) -> None:
    if target.pre_existing or not target.path.exists():
        return
    logger.info("removing %s", target.path)
    try:
        shutil.rmtree(target.path)
    except OSError as exc:
        logger.error("could not remove half-created %s: %s", target.path, exc)


@contextmanager
def pending_creation(ctx: RunContext):
    """Remove a newly created target unless the block ends with status 0.

    Also covers exceptions and interrupts raised inside the block. A
    target that existed before the run is never removed.
    """
    try:
        yield ctx
    except BaseException:
        _remove_if_new(ctx.target)
        raise
    if ctx.status != 0:
        _remove_if_new(ctx.target)


def create_virtualenv(
    argv: Sequence[str],
    pyenv,
    settings: Settings,
    hooks: Optional[HookList] = None,
    backends: Optional[Mapping[BackendChoice, Backend]] = None,
    prompt: Callable[[str], str] = ask,
) -> int:
    """Create (or upgrade) a virtualenv and return the exit status"""
    argv = list(argv)
    if argv[:1] == ["--complete"]:
        for version in pyenv.versions():
            print(version)
        return 0

    parsed = parse_options(argv)
    if parsed.has("h", "help"):
        print(USAGE, end="")
        return 0
    if parsed.has("version"):
        print(f"pvenv {__version__}")
        return 0

    if backends is None:
        backends = default_backends()

    ctx = init_context(parsed, pyenv, settings)
    logger.debug("creating %s from %s", ctx.target.path, ctx.version)
    backend = prepare_backend(ctx, pyenv, settings, backends)

    if hooks is None:
        hooks = HookList.discover(pyenv)

    confirm(ctx, prompt)
    if ctx.upgrade and ctx.backend == BackendChoice.VIRTUALENV and ctx.target.populated:
        ctx.snapshot = migrate.snapshot(
            pyenv, ctx.target.name, ctx.target.path, settings.tmp_dir, env=ctx.env
        )

    with pending_creation(ctx):
        hooks.run_before(ctx)

        settings.cache_path.mkdir(parents=True, exist_ok=True)
        ctx.status = backend.create(pyenv, ctx, cwd=settings.cache_path)

        if ctx.snapshot is not None:
            if ctx.status == 0:
                ctx.status = migrate.replay(
                    pyenv, ctx.target.name, ctx.snapshot,
                    quiet=ctx.quiet, verbose=ctx.verbose, env=ctx.env,
                )
            else:
                logger.error(
                    "virtualenv was not recreated, old one kept at %s", ctx.snapshot.upgrade_path
                )

        hooks.run_after(ctx)

    if ctx.status == 0:
        pyenv.rehash()
    return ctx.status
