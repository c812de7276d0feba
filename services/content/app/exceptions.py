class ContentError(Exception):
    """Base error for the content core."""

    def __init__(self, message, code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv["message"] = self.message
        rv["code"] = self.code
        rv["success"] = False
        return rv


class ValidationError(ContentError):
    """Missing or malformed input; raised before any state change."""

    def __init__(self, message="Invalid data", payload=None):
        super().__init__(message, code=400, payload=payload)


class AuthenticationError(ContentError):
    def __init__(self, message="Invalid credentials", payload=None):
        super().__init__(message, code=401, payload=payload)


class PermissionDeniedError(ContentError):
    def __init__(self, message="Access denied", payload=None):
        super().__init__(message, code=403, payload=payload)


class NotFoundError(ContentError):
    def __init__(self, message="Not found", payload=None):
        super().__init__(message, code=404, payload=payload)


class InvalidTransitionError(ContentError):
    """Article status change not allowed by the editorial workflow."""

    def __init__(self, message="Invalid status transition", payload=None):
        super().__init__(message, code=409, payload=payload)


class ProtectedResourceError(ContentError):
    """Attempt to remove something marked as protected, such as a system page."""

    def __init__(self, message="Resource is protected", payload=None):
        super().__init__(message, code=409, payload=payload)


class StorageUnavailableError(ContentError):
    """The backing store could not be read; nothing was loaded or changed."""

    def __init__(self, message="Storage is unavailable, please try again shortly", payload=None):
        super().__init__(message, code=503, payload=payload)
