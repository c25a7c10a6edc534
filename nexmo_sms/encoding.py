"""
Encoding Module

Decides whether a message fits the GSM 03.38 basic alphabet (7-bit "text"
messages) or has to be sent as a 16-bit "unicode" message, and checks that
parameter values are valid UTF-8.
"""

from .errors import EncodingError


# GSM 03.38 basic character set, in table order (0x00 - 0x7F)
GSM0338_BASIC = (
    "@£$¥èéùìòÇ\nØø\rÅåΔ_ΦΓΛΩΠΨΣΘΞ\x1bÆæßÉ !\"#¤%&'()*+,-./0123456789:;<=>?"
    "¡ABCDEFGHIJKLMNOPQRSTUVWXYZÄÖÑÜ§¿abcdefghijklmnopqrstuvwxyzäöñüà"
)

_GSM0338_SET = frozenset(GSM0338_BASIC)


def is_gsm0338(text):
    """
    Check if text contains only characters of the GSM 03.38 basic alphabet.

    Characters of the extension table (€, [, ], {, }, ^, ~, |, backslash)
    need an escape sequence and are not accepted here.

    Args:
        text: Message text (str, or UTF-8 encoded bytes)

    Returns:
        bool: True if every character is in the basic alphabet

    Raises:
        EncodingError: If text is bytes that are not valid UTF-8
    """
    if isinstance(text, (bytes, bytearray)):
        text = require_utf8(text, 'Message text must be valid UTF-8 encoded bytes')

    for char in text:
        if char not in _GSM0338_SET:
            return False
    return True


fits_basic_alphabet = is_gsm0338


def is_valid_utf8(value):
    """Check if value is bytes that decode as UTF-8, or a str that encodes as UTF-8."""
    try:
        if isinstance(value, (bytes, bytearray)):
            bytes(value).decode('utf-8')
        else:
            str(value).encode('utf-8')
    except UnicodeError:
        return False
    return True


def require_utf8(value, message):
    """
    Return value as a str, raising EncodingError if it is not valid UTF-8.

    Bytes are decoded, anything else (numbers included) goes through str().

    Args:
        value: str, bytes or any value with a text form
        message: Error message used when validation fails

    Returns:
        str: The decoded value
    """
    if not is_valid_utf8(value):
        raise EncodingError(message)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8')
    return str(value)

