class PvenvError(Exception):
    exit_code = 1

    def __init__(self, msg, exit_code=None):
        self.msg = msg
        if exit_code is not None:
            self.exit_code = exit_code
        super().__init__(self.msg)


class UsageError(PvenvError):
    pass


class VersionNotInstalledError(PvenvError):
    def __init__(self, version):
        self.version = version
        super().__init__(f"pvenv: version `{version}' is not installed")


class ConfirmationDeclined(PvenvError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"pvenv: leaving `{path}' untouched")


class BackendInstallError(PvenvError):
    def __init__(self, command, status):
        self.msg = (
            f"pvenv: failed to install virtualenv!"
            f"\nRan command: `{' '.join(command)}`"
            f"\nExit status: {status}"
        )
        super().__init__(self.msg, exit_code=status)


class HookError(PvenvError):
    def __init__(self, fragment, status, err):
        self.msg = (
            f"pvenv: hook failed!"
            f"\nFragment: `{fragment}`"
            f"\nExit status: {status}"
            f"\nError message: {err}"
        )
        super().__init__(self.msg, exit_code=status)


class NotAVirtualenvError(PvenvError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"pvenv: `{name}' is not a virtualenv")


class SnapshotError(PvenvError):
    def __init__(self, name, status):
        self.name = name
        super().__init__(
            f"pvenv: could not list the packages of `{name}' (pip freeze exited with {status}),"
            f" leaving it untouched",
            exit_code=status,
        )
