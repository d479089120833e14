"""Unified error codes and custom exceptions.

Errors are transport-agnostic: each one carries the HTTP status it maps to,
and only the API boundary (src/main.py) turns them into responses. The CLI
maps the same errors to a printed message and a non-zero exit code.

Error code ranges:
  1xxx: Users (validation, lookup)
  9xxx: System (store, configuration, file I/O)
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Users ---

class ValidationFailedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(1001, detail, 400)


class UserNotFoundError(AppError):
    def __init__(self, user_id: int) -> None:
        super().__init__(1002, f"User with id {user_id} not found", 404)


# --- 9xxx: System ---

class StoreError(AppError):
    """Connectivity, constraint or query failure in the user store."""

    def __init__(self, detail: str) -> None:
        super().__init__(9001, detail, 500)


class ConfigError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9002, detail, 500)


class FileProcessingError(AppError):
    """File could not be read or parsed (CLI paths)."""

    def __init__(self, detail: str) -> None:
        super().__init__(9003, detail, 500)
