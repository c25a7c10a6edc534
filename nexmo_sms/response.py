"""
Response Parsing Module

Decodes Nexmo responses (JSON or XML) and checks them for the message count,
the per-recipient messages and any provider reported error.
"""

import json
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .errors import ProviderError, ResponseFormatError

logger = logging.getLogger('NexmoSMS')

FORMATS = ('json', 'xml')


@dataclass(frozen=True)
class MessageOutcome:
    """Result reported by Nexmo for one recipient"""

    status: str
    error_text: str = None
    message_id: str = None
    fields: dict = field(default_factory=dict)

    @property
    def ok(self):
        return not self.error_text


@dataclass(frozen=True)
class ParsedResponse:
    """
    Decoded Nexmo response.

    Attributes:
        format: 'json' or 'xml'
        data: The decoded dict (json) or root Element (xml)
        message_count: Value of the message count field
        messages: Tuple of MessageOutcome, in response order
    """

    format: str
    data: object
    message_count: int
    messages: tuple = ()

    @property
    def message_ids(self):
        return [m.message_id for m in self.messages if m.message_id]


def parse_json(body):
    """Decode a JSON response body into a dict."""
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise ResponseFormatError('json', f"Failed to parse response into json: {e}") from e
    if not isinstance(data, dict):
        raise ResponseFormatError('json', "response body must be a json object")
    return data


def parse_xml(body):
    """Decode an XML response body into its root Element."""
    if isinstance(body, bytes):
        body = body.decode('utf-8')
    try:
        return ET.fromstring(str(body))
    except ET.ParseError as e:
        raise ResponseFormatError('xml', f"Failed to parse response into xml: {e}") from e


def _parse_count(response_format, value):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ResponseFormatError(
            response_format, f"message count must be an integer, got {value!r}") from None


def _read_json(data):
    if 'message-count' not in data:
        raise ResponseFormatError('json', "message-count must be in the json response body")
    count = _parse_count('json', data['message-count'])

    messages = data.get('messages')
    if not messages or not isinstance(messages, list):
        raise ResponseFormatError('json', "messages property must be in the json response body")

    outcomes = []
    for message in messages:
        if not isinstance(message, dict):
            raise ResponseFormatError('json', f"unexpected message entry {message!r}")
        outcomes.append(MessageOutcome(
            status=_as_text(message.get('status')),
            error_text=message.get('error-text') or None,
            message_id=message.get('message-id'),
            fields=dict(message),
        ))
    return count, outcomes


def _read_xml(root):
    messages = root if root.tag == 'messages' else root.find('messages')
    if messages is None:
        raise ResponseFormatError('xml', "messages property must be in the xml response body")
    if 'count' not in messages.attrib:
        raise ResponseFormatError('xml', "message count must be in the xml response body")
    count = _parse_count('xml', messages.attrib['count'])

    entries = messages.findall('message')
    if not entries:
        raise ResponseFormatError('xml', "messages property must be in the xml response body")

    outcomes = []
    for entry in entries:
        fields = {child.tag: (child.text or '').strip() for child in entry}
        outcomes.append(MessageOutcome(
            status=fields.get('status'),
            error_text=fields.get('errorText') or None,
            message_id=fields.get('messageId'),
            fields=fields,
        ))
    return count, outcomes


def _as_text(value):
    return None if value is None else str(value)


def parse_response(body, response_format='json'):
    """
    Parse the response from Nexmo into json or xml.

    Args:
        body: The raw response body
        response_format: 'json' (default) or 'xml'

    Returns:
        ParsedResponse: The decoded response with count and messages

    Raises:
        ResponseFormatError: If the body cannot be decoded or lacks the
            message count or the messages collection
    """
    response_format = str(response_format).lower()
    if response_format == 'json':
        data = parse_json(body)
        count, outcomes = _read_json(data)
    elif response_format == 'xml':
        data = parse_xml(body)
        count, outcomes = _read_xml(data)
    else:
        raise ResponseFormatError(response_format, "unsupported response format")

    return ParsedResponse(
        format=response_format,
        data=data,
        message_count=count,
        messages=tuple(outcomes),
    )


def validate_response(parsed):
    """
    Raise ProviderError for the first message that carries an error text.

    Later messages are not inspected once an error is found.
    """
    for outcome in parsed.messages:
        if outcome.error_text:
            logger.warning(f"Nexmo reported an error: [{outcome.status}] - {outcome.error_text}")
            raise ProviderError(outcome.status, outcome.error_text)
    return parsed


def parse_and_validate(body, response_format='json'):
    """Parse a Nexmo response and check it for provider errors."""
    return validate_response(parse_response(body, response_format))
