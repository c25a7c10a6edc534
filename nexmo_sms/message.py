"""
Message Builder Module

Outbound message types and the per-type builders that turn a message into
the request fields posted to the Nexmo API.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from .encoding import is_gsm0338, require_utf8
from .errors import UnsupportedTypeError
from .params import filter_params

logger = logging.getLogger('NexmoSMS')


class MessageType(Enum):
    TEXT = 'text'
    UNICODE = 'unicode'
    BINARY = 'binary'
    WAPPUSH = 'wappush'

    @classmethod
    def from_name(cls, name):
        """
        Look up a message type by name (case insensitive).

        Raises:
            UnsupportedTypeError: If the name is not a known message type
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise UnsupportedTypeError(name) from None


@dataclass(frozen=True)
class TextMessage:
    """Plain text message, sent as GSM 7-bit 'text' or 16-bit 'unicode'"""

    sender: str
    recipient: str
    text: str
    type: MessageType = MessageType.TEXT
    extra: dict = field(default_factory=dict)

    required = ('from', 'to', 'text', 'type')

    def to_params(self):
        return {**self.extra, 'from': self.sender, 'to': self.recipient,
                'text': self.text, 'type': self.type.value}


@dataclass(frozen=True)
class BinaryMessage:
    """Binary data message with a User Data Header"""

    sender: str
    recipient: str
    body: bytes
    udh: bytes
    extra: dict = field(default_factory=dict)

    type = MessageType.BINARY
    required = ('from', 'to', 'type', 'body', 'udh')

    def to_params(self):
        return {**self.extra, 'from': self.sender, 'to': self.recipient,
                'type': self.type.value, 'body': self.body, 'udh': self.udh}


@dataclass(frozen=True)
class WapPushMessage:
    """WAP Push message carrying a title and a URL"""

    sender: str
    recipient: str
    title: str
    url: str
    extra: dict = field(default_factory=dict)

    type = MessageType.WAPPUSH
    required = ('from', 'to', 'type', 'title', 'url')

    def to_params(self):
        return {**self.extra, 'from': self.sender, 'to': self.recipient,
                'type': self.type.value, 'title': self.title, 'url': self.url}


# Keys that are set from the message itself and never taken from extra fields
_MESSAGE_KEYS = {
    MessageType.TEXT: ('from', 'to', 'type', 'text'),
    MessageType.UNICODE: ('from', 'to', 'type', 'text'),
    MessageType.BINARY: ('from', 'to', 'type', 'body', 'udh'),
    MessageType.WAPPUSH: ('from', 'to', 'type', 'title', 'url'),
}


def make_message(message_type, sender, recipient, fields=None):
    """
    Build an outbound message from a type name and a field mapping.

    Args:
        message_type: 'text', 'unicode', 'binary' or 'wappush' (any case)
        sender: The sender address, numeric or alphanumeric
        recipient: The recipient number in international format
        fields: The message fields (text, body/udh or title/url) plus any
            optional Nexmo parameters

    Returns:
        TextMessage | BinaryMessage | WapPushMessage

    Raises:
        UnsupportedTypeError: If message_type is not supported
    """
    message_type = MessageType.from_name(message_type)
    fields = dict(fields or {})
    extra = {key: value for key, value in fields.items()
             if key not in _MESSAGE_KEYS[message_type]}

    if message_type in (MessageType.TEXT, MessageType.UNICODE):
        return TextMessage(sender, recipient, fields.get('text'),
                           type=message_type, extra=extra)
    if message_type is MessageType.BINARY:
        return BinaryMessage(sender, recipient, fields.get('body'),
                             fields.get('udh'), extra=extra)
    return WapPushMessage(sender, recipient, fields.get('title'),
                          fields.get('url'), extra=extra)


def _is_numeric(value):
    return str(value).isdigit()


def build_text_fields(message, api_key, api_secret):
    """
    Build the request fields of a text or unicode message.

    A 'text' message whose body does not fit the GSM 03.38 basic alphabet is
    sent as 'unicode' instead. An explicit 'unicode' message is kept as is.
    """
    params = filter_params(message.to_params(), message.required, api_key, api_secret)

    if not _is_numeric(params['from']):
        params['from'] = require_utf8(
            params['from'], 'from parameter must be a valid UTF-8 encoded string')
    params['text'] = require_utf8(
        params['text'], 'SMS message must be a valid UTF-8 encoded string')

    if params['type'] == MessageType.TEXT.value and not is_gsm0338(params['text']):
        logger.debug("Message text is outside the GSM 03.38 alphabet, sending as unicode")
        params['type'] = MessageType.UNICODE.value

    return params


def build_binary_fields(message, api_key, api_secret):
    """Build the request fields of a binary message, hex encoding body and udh."""
    params = filter_params(message.to_params(), message.required, api_key, api_secret)
    params['body'] = _to_bytes(params['body']).hex()
    params['udh'] = _to_bytes(params['udh']).hex()
    return params


def build_wappush_fields(message, api_key, api_secret):
    """Build the request fields of a WAP Push message."""
    params = filter_params(message.to_params(), message.required, api_key, api_secret)

    error = 'title and url parameters must be valid UTF-8 encoded strings'
    params['title'] = require_utf8(params['title'], error)
    params['url'] = require_utf8(params['url'], error)
    return params


def _to_bytes(value):
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return str(value).encode('utf-8')


_BUILDERS = {
    TextMessage: build_text_fields,
    BinaryMessage: build_binary_fields,
    WapPushMessage: build_wappush_fields,
}


def build_request_fields(message, api_key, api_secret):
    """
    Validate a message and build the fields sent to the Nexmo API.

    Args:
        message: TextMessage, BinaryMessage or WapPushMessage
        api_key: Client API key
        api_secret: Client API secret

    Returns:
        dict: Request fields including api_key, api_secret and type

    Raises:
        MissingParameterError: If a required field is missing or blank
        EncodingError: If a text field is not valid UTF-8
    """
    builder = _BUILDERS.get(type(message))
    if builder is None:
        raise UnsupportedTypeError(type(message).__name__)
    return builder(message, api_key, api_secret)
