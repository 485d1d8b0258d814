from __future__ import annotations

from google.auth.exceptions import RefreshError


class StoreConfigurationError(ValueError):
    """Raised when spreadsheet settings are incomplete."""


class StoreError(Exception):
    """Base class for failures of a single store operation."""


class StoreUnavailable(StoreError):
    """The backing spreadsheet could not be reached (transport or auth failure)."""


class EntryNotFound(StoreError, LookupError):
    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Entry '{entry_id}' not found")


class ContainerNotFound(StoreError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Sheet "{name}" not found')


def format_refresh_error(exc: RefreshError) -> str:
    """
    Возвращает человекочитаемое сообщение об ошибке обновления токена/валидности JWT.
    """
    # Обычно ошибка приходит как ('invalid_grant: Invalid JWT Signature.', {...})
    message = ""
    for arg in exc.args:
        if isinstance(arg, str):
            message = arg
            break
        if isinstance(arg, dict):
            descr = arg.get("error_description") or arg.get("error")
            if descr:
                message = descr
                break
    if not message:
        message = str(exc)
    return f"Google authorization failed: {message}. Check the service account credentials."


def describe_transport_error(exc: Exception) -> str:
    if isinstance(exc, RefreshError):
        return format_refresh_error(exc)
    reason = getattr(exc, "reason", None)
    if isinstance(reason, str) and reason:
        return reason
    return str(exc) or exc.__class__.__name__
