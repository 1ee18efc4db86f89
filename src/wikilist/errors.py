# Exception types raised by wikilist


class WikiClientError(Exception):
    pass


class OperationFailedError(WikiClientError):
    """The MediaWiki API reported a failure for the request.

    `code` and `info` carry the `error.code` / `error.info` pair from the
    response body when there is one.
    """

    def __init__(self, code=None, info=None):
        if code and info:
            message = f'{code}: {info}'
        else:
            message = code or info or 'The MediaWiki API request failed.'
        super().__init__(message)
        self.code = code
        self.info = info


class UnauthorizedOperationError(OperationFailedError):
    pass


class BadTokenError(OperationFailedError):
    pass


class InvalidActionError(OperationFailedError):
    pass


class AccountAssertionFailureError(OperationFailedError):
    pass


class OperationConflictError(OperationFailedError):
    pass


class InvalidSearchBackendError(OperationFailedError):
    pass


class MediaWikiRemoteError(OperationFailedError):
    """Unhandled exception on the server side (`internal_api_error_*`)."""

    def __init__(self, code=None, info=None, error_class=None, remote_trace=None):
        super().__init__(code, info)
        self.error_class = error_class
        self.remote_trace = remote_trace


class UnexpectedDataError(WikiClientError):
    pass


class ContinuationLoopError(UnexpectedDataError):
    pass


class OperationCancelledError(WikiClientError):
    pass
