from __future__ import annotations

from typing import Any


class GateError(Exception):
    pass


class ConfigurationError(GateError):
    """Requirements or inputs that cannot be turned into an evaluable policy."""

    def __init__(self, message: str, *, config: Any = None, value: Any = None) -> None:
        super().__init__(message)
        self.config = config
        self.value = value


class CollaboratorError(GateError):
    """An external lookup (paths, reviewers, team members) failed."""

    def __init__(self, collaborator: str, identifier: str, message: str) -> None:
        super().__init__(f"{collaborator} failed for {identifier}: {message}")
        self.collaborator = collaborator
        self.identifier = identifier


class ReportError(GateError):
    """Failure carrying a friendly commit status description.

    `str(err)` is the description; `err.cause` is the underlying error.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
