class BackendError(Exception):
    """A call to the hosted backend failed (transport error or error status)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendResponseError(BackendError):
    """The backend answered with a payload of an unexpected shape."""


class StorageError(BackendError):
    """Object storage rejected an upload."""


class AuthProviderError(BackendError):
    """The auth service rejected a request.

    ``message`` is the provider's own wording and may be shown to the user.
    """
