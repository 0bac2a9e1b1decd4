from __future__ import annotations


class AppError(Exception):
    """Base app error."""


class ConfigError(AppError):
    pass


class RemoteUnavailableError(AppError):
    pass


class WriteRejectedError(AppError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
