"""Error base class shared by the core and API layers.

:class:`GatewayError` carries the HTTP status a failure maps to.  The API
layer renders every subclass as a ``{success: false, message, data: null}``
envelope (see :mod:`geminigate.api.errors`).
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for errors that map directly to an HTTP response.

    The message is returned to the client unchanged unless a more specific
    handler replaces it.
    """

    status_code: int = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
