"""
Error Types Module

Exceptions raised while building, sending and validating SMS requests.
Every error is raised synchronously to the caller; nothing here is retried.
"""

from enum import Enum


class NexmoError(Exception):
    """Base class for all errors raised by this package"""


class InvalidArgumentError(NexmoError, ValueError):
    """Malformed caller input, detected before any network I/O"""


class InvalidConfigurationError(InvalidArgumentError):
    """Client settings that cannot be used to send a request"""


class MissingParameterError(InvalidArgumentError):
    """One or more required request parameters are missing or empty"""

    def __init__(self, keys):
        self.keys = tuple(keys)
        super().__init__(
            'Parameters with the following keys are missing: ' + ', '.join(self.keys)
        )


class EncodingError(InvalidArgumentError):
    """A parameter is not a valid UTF-8 string"""


class UnsupportedTypeError(InvalidArgumentError):
    """Unknown SMS message type"""

    def __init__(self, message_type):
        self.type = message_type
        super().__init__(f"Unknown type ({message_type}) for sending SMS Message")


class UnsupportedMethodError(InvalidArgumentError):
    """HTTP method other than GET or POST"""

    def __init__(self, method):
        self.method = method
        super().__init__(f"Unknown request method {method}")


class TransportErrorKind(Enum):
    CONNECT_FAILED = 'connect_failed'
    TLS_VERIFY_FAILED = 'tls_verify_failed'
    OTHER = 'other'


class TransportError(NexmoError):
    """
    Network-level failure while talking to the Nexmo server.

    Attributes:
        kind: TransportErrorKind
        message: Human readable description
        cause: The low-level exception, kept for diagnostics
    """

    def __init__(self, kind, message, cause=None):
        self.kind = kind
        self.message = message
        self.cause = cause
        detail = f"{message}"
        if cause is not None:
            detail += f" (Error Tracker: [{type(cause).__name__}]: {cause})"
        super().__init__(detail)


class ResponseFormatError(NexmoError):
    """The response body could not be decoded or lacks the expected shape"""

    def __init__(self, response_format, detail):
        self.format = response_format
        self.detail = detail
        super().__init__(f"Invalid {response_format} response: {detail}")


class ProviderError(NexmoError):
    """The Nexmo server reported a failure for one of the recipients"""

    def __init__(self, status, error_text):
        self.status = status
        self.error_text = error_text
        super().__init__(
            f"Unable to send SMS message (Error Tracker: [{status}] - {error_text})"
        )
