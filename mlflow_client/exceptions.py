import logging

# Error codes returned by the MLflow tracking server in the ``error_code`` field of
# a JSON error response.
INTERNAL_ERROR = "INTERNAL_ERROR"
TEMPORARILY_UNAVAILABLE = "TEMPORARILY_UNAVAILABLE"
IO_ERROR = "IO_ERROR"
BAD_REQUEST = "BAD_REQUEST"
INVALID_STATE = "INVALID_STATE"
DATA_LOSS = "DATA_LOSS"
NOT_IMPLEMENTED = "NOT_IMPLEMENTED"
DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"
CANCELLED = "CANCELLED"
RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"
REQUEST_LIMIT_EXCEEDED = "REQUEST_LIMIT_EXCEEDED"
ABORTED = "ABORTED"
RESOURCE_CONFLICT = "RESOURCE_CONFLICT"
ALREADY_EXISTS = "ALREADY_EXISTS"
NOT_FOUND = "NOT_FOUND"
ENDPOINT_NOT_FOUND = "ENDPOINT_NOT_FOUND"
RESOURCE_DOES_NOT_EXIST = "RESOURCE_DOES_NOT_EXIST"
RESOURCE_ALREADY_EXISTS = "RESOURCE_ALREADY_EXISTS"
PERMISSION_DENIED = "PERMISSION_DENIED"
CUSTOMER_UNAUTHORIZED = "CUSTOMER_UNAUTHORIZED"
UNAUTHENTICATED = "UNAUTHENTICATED"
INVALID_PARAMETER_VALUE = "INVALID_PARAMETER_VALUE"

ERROR_CODE_TO_HTTP_STATUS = {
    INTERNAL_ERROR: 500,
    INVALID_STATE: 500,
    DATA_LOSS: 500,
    IO_ERROR: 500,
    NOT_IMPLEMENTED: 501,
    TEMPORARILY_UNAVAILABLE: 503,
    DEADLINE_EXCEEDED: 504,
    REQUEST_LIMIT_EXCEEDED: 429,
    CANCELLED: 499,
    RESOURCE_EXHAUSTED: 429,
    ABORTED: 409,
    RESOURCE_CONFLICT: 409,
    ALREADY_EXISTS: 409,
    NOT_FOUND: 404,
    ENDPOINT_NOT_FOUND: 404,
    RESOURCE_DOES_NOT_EXIST: 404,
    PERMISSION_DENIED: 403,
    CUSTOMER_UNAUTHORIZED: 401,
    UNAUTHENTICATED: 401,
    BAD_REQUEST: 400,
    RESOURCE_ALREADY_EXISTS: 400,
    INVALID_PARAMETER_VALUE: 400,
}

HTTP_STATUS_TO_ERROR_CODE = {v: k for k, v in ERROR_CODE_TO_HTTP_STATUS.items()}
HTTP_STATUS_TO_ERROR_CODE[400] = BAD_REQUEST
HTTP_STATUS_TO_ERROR_CODE[404] = ENDPOINT_NOT_FOUND
HTTP_STATUS_TO_ERROR_CODE[500] = INTERNAL_ERROR

_NOT_FOUND_ERROR_CODES = frozenset([NOT_FOUND, ENDPOINT_NOT_FOUND, RESOURCE_DOES_NOT_EXIST])

_logger = logging.getLogger(__name__)


def get_error_code(http_status):
    """Error code reported for a failed request that carried no JSON error body."""
    return HTTP_STATUS_TO_ERROR_CODE.get(http_status, INTERNAL_ERROR)


class MlflowException(Exception):
    """
    Base class of every error raised by the client. The message is shown to callers verbatim,
    so it names the field, key or entity ID involved in the failure.

    Args:
        message: Description of the failure.
        error_code: One of the error codes defined in this module. Unknown codes are reported
            as ``INTERNAL_ERROR``.
        status_code: HTTP status of the response that caused the error, if any.
    """

    def __init__(self, message, error_code=INTERNAL_ERROR, status_code=None):
        self.error_code = error_code if error_code in ERROR_CODE_TO_HTTP_STATUS else INTERNAL_ERROR
        self.message = str(message)
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def is_not_found(self):
        """True if the error reports a missing resource or endpoint."""
        return self.error_code in _NOT_FOUND_ERROR_CODES

    @classmethod
    def invalid_parameter_value(cls, message):
        return cls(message, error_code=INVALID_PARAMETER_VALUE)


def _error_code_from_json(json, status_code):
    error_code = json.get("error_code", INTERNAL_ERROR)
    if error_code in ERROR_CODE_TO_HTTP_STATUS:
        return error_code
    # Proxies in front of the server may put an HTTP status in `error_code`
    try:
        return HTTP_STATUS_TO_ERROR_CODE[int(error_code)]
    except (ValueError, KeyError):
        _logger.warning(
            f"Unrecognized error code {error_code!r} in response; the request may have failed "
            "before reaching the tracking server, e.g. in a proxy or an auth service."
        )
        return get_error_code(status_code) if status_code else INTERNAL_ERROR


class RestException(MlflowException):
    """
    Raised when the tracking server answers with a JSON error body. ``json`` holds that body
    and the message reads ``"<error_code>: <message>"``.
    """

    def __init__(self, json, status_code=None):
        self.json = json
        message = json.get("message", f"Response: {json}")
        super().__init__(
            f"{json.get('error_code', INTERNAL_ERROR)}: {message}",
            error_code=_error_code_from_json(json, status_code),
            status_code=status_code,
        )

    def __reduce__(self):
        return RestException, (self.json, self.status_code)


class InvalidUrlException(MlflowException):
    """Raised when a request cannot be sent because its URL is malformed."""
