"""
Nexmo SMS Library
Send SMS messages through the Nexmo REST API and capture its callbacks
"""

from .client import ClientConfig, NexmoClient
from .encoding import fits_basic_alphabet, is_gsm0338
from .errors import (
    EncodingError,
    InvalidArgumentError,
    InvalidConfigurationError,
    MissingParameterError,
    NexmoError,
    ProviderError,
    ResponseFormatError,
    TransportError,
    TransportErrorKind,
    UnsupportedMethodError,
    UnsupportedTypeError,
)
from .message import BinaryMessage, MessageType, TextMessage, WapPushMessage, make_message
from .params import filter_params
from .response import MessageOutcome, ParsedResponse, parse_and_validate
from .transport import TransportResult, send_request

__all__ = [
    'NexmoClient',
    'ClientConfig',
    'is_gsm0338',
    'fits_basic_alphabet',
    'filter_params',
    'MessageType',
    'TextMessage',
    'BinaryMessage',
    'WapPushMessage',
    'make_message',
    'send_request',
    'TransportResult',
    'parse_and_validate',
    'ParsedResponse',
    'MessageOutcome',
    'NexmoError',
    'InvalidArgumentError',
    'InvalidConfigurationError',
    'MissingParameterError',
    'EncodingError',
    'UnsupportedTypeError',
    'UnsupportedMethodError',
    'TransportError',
    'TransportErrorKind',
    'ResponseFormatError',
    'ProviderError',
]
