from __future__ import annotations


class DevProxyError(Exception):
    """Recoverable failure of a single provisioning/tear-down step."""


class ToolNotFoundError(DevProxyError):
    def __init__(self, tool: str, hint: str | None = None):
        self.tool = tool
        self.hint = hint
        msg = f"'{tool}' was not found on PATH."
        if hint:
            msg = f"{msg} {hint}"
        super().__init__(msg)


class CommandFailedError(DevProxyError):
    def __init__(self, args: list[str], returncode: int):
        self.args_list = list(args)
        self.returncode = returncode
        super().__init__(f"Command {' '.join(self.args_list)!r} exited with status {returncode}.")


class ContainerRuntimeUnavailable(DevProxyError):
    pass


class PrivilegedWriteError(DevProxyError):
    pass
