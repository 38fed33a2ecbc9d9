from __future__ import annotations


class ElyError(Exception):
    """Base class for errors the CLI reports to the user."""


class InvalidDirectoryError(ElyError):
    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class DirectoryNotFoundError(InvalidDirectoryError):
    def __init__(self, path: str):
        super().__init__(path, f"Directory '{path}' does not exist")


class NotADirectoryPathError(InvalidDirectoryError):
    def __init__(self, path: str):
        super().__init__(path, f"'{path}' is not a directory")


class ClipboardUnavailable(ElyError):
    pass


class PackStepError(ElyError):
    """A build/pack step failed or produced no archive."""

    def __init__(self, step: str, detail: str = ""):
        message = f"{step} failed" + (f": {detail}" if detail else "")
        super().__init__(message)
        self.step = step
        self.detail = detail
