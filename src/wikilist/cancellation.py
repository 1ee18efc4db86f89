# Cooperative cancellation for list enumeration

import threading

from .errors import OperationCancelledError


class CancellationToken:
    """A flag shared between the caller and a running enumeration.

    The enumerator checks it before every API call and again once the call
    returns, so a page fetched after cancellation is never handed out.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise OperationCancelledError('The operation has been cancelled.')


def raise_if_cancelled(token):
    # None means "not cancellable"
    if token is not None:
        token.raise_if_cancelled()
