"""
Nexmo SMS Client Module

Sends SMS messages through the Nexmo REST API and captures the delivery
receipts and inbound messages Nexmo posts back.

Usage:
    client = NexmoClient('key', 'secret')
    response = client.send_sms('Acme', '15551234567', {'text': 'Hello'})
    print(response.message_ids)
"""

import copy
import logging
import threading
from dataclasses import dataclass, field

from .database import connect_database, insert
from .errors import InvalidConfigurationError
from .inbound import capture_receiving_data
from .message import build_request_fields, make_message
from .response import FORMATS, parse_and_validate
from .transport import DEFAULT_TIMEOUT, send_request

logger = logging.getLogger('NexmoSMS')

DEFAULT_BASE_URL = 'https://rest.nexmo.com'

DEFAULT_SETTINGS = {
    'endpoint_format': 'json',
    'base_url': DEFAULT_BASE_URL,
    'timeout': DEFAULT_TIMEOUT,
    'verify_tls_peer': True,
    'headers': {},
}

# Older setting names still accepted by config()
_ALIASES = {
    'endpoint_type': 'endpoint_format',
    'ssl_verify_peer': 'verify_tls_peer',
}


@dataclass(frozen=True)
class ClientConfig:
    """Settings used for one send_sms call"""

    endpoint_format: str = 'json'
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    verify_tls_peer: bool = True
    headers: dict = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings):
        endpoint_format = str(settings.get('endpoint_format', 'json')).lower()
        if endpoint_format not in FORMATS:
            raise InvalidConfigurationError(
                f"endpoint_format must be one of {', '.join(FORMATS)}, got {endpoint_format!r}")

        try:
            timeout = float(settings.get('timeout', DEFAULT_TIMEOUT))
        except (TypeError, ValueError):
            raise InvalidConfigurationError(
                f"timeout must be a number, got {settings.get('timeout')!r}") from None
        if timeout <= 0:
            raise InvalidConfigurationError(f"timeout must be positive, got {timeout}")

        return cls(
            endpoint_format=endpoint_format,
            base_url=str(settings.get('base_url') or DEFAULT_BASE_URL).rstrip('/'),
            timeout=timeout,
            verify_tls_peer=_as_bool(settings.get('verify_tls_peer', True)),
            headers=dict(settings.get('headers') or {}),
        )

    @property
    def url(self):
        return f"{self.base_url}/sms/{self.endpoint_format}"


_TRUE_STRINGS = ('true', '1', 'yes', 'on')
_FALSE_STRINGS = ('false', '0', 'no', 'off')


def _as_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise InvalidConfigurationError(
        f"verify_tls_peer must be a boolean, got {value!r}")


def _merge_recursive(base, update):
    merged = dict(base)
    for key, value in update.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge_recursive(merged[key], value)
        else:
            merged[key] = value
    return merged


def _normalise_keys(settings):
    return {_ALIASES.get(key, key): value for key, value in settings.items()}


def _masked(fields):
    return {key: ('***' if key == 'api_secret' else value) for key, value in fields.items()}


class NexmoClient:
    """Client for the Nexmo SMS API"""

    def __init__(self, api_key=None, api_secret=None, options=None, transport=send_request):
        """
        Create a Nexmo SMS client

        Args:
            api_key: Nexmo API key
            api_secret: Nexmo API secret
            options: Settings overriding DEFAULT_SETTINGS
            transport: Callable used to send HTTP requests, with the
                signature of nexmo_sms.transport.send_request
        """
        self._api_key = api_key
        self._api_secret = api_secret
        self._transport = transport
        self._lock = threading.Lock()
        self._settings = _merge_recursive(
            copy.deepcopy(DEFAULT_SETTINGS), _normalise_keys(copy.deepcopy(options or {})))

        self.delivery_receipt_data = {}
        self.inbound_message = {}

    @property
    def api_key(self):
        return self._api_key

    @api_key.setter
    def api_key(self, value):
        self._api_key = value

    @property
    def api_secret(self):
        return self._api_secret

    @api_secret.setter
    def api_secret(self, value):
        self._api_secret = value

    def config(self, name, value=None):
        """
        Configure Nexmo SMS settings

        If name is a mapping, it is merged into the current settings: a
        shallow update by default, a recursive merge when value is True.
        Otherwise name is the setting to modify and value its new value.

        Args:
            name: Setting name, or a mapping of settings
            value: Setting value, or the recursive merge flag
        """
        with self._lock:
            if isinstance(name, dict):
                update = _normalise_keys(copy.deepcopy(name))
                if value is True:
                    settings = _merge_recursive(self._settings, update)
                else:
                    settings = {**self._settings, **update}
            else:
                settings = dict(self._settings)
                settings[_ALIASES.get(name, name)] = copy.deepcopy(value)
            self._settings = settings

    @property
    def settings(self):
        with self._lock:
            return copy.deepcopy(self._settings)

    def snapshot(self):
        """Return the current settings as an immutable ClientConfig."""
        with self._lock:
            settings = self._settings
        return ClientConfig.from_settings(settings)

    def build_url(self):
        """Build the Nexmo REST endpoint for the configured response format."""
        return self.snapshot().url

    def send_sms(self, sender, recipient, message, type='text'):
        """
        Send a SMS message

        Args:
            sender: The sender address that may be alphanumeric
            recipient: The recipient mobile number in international format
            message: Mapping with the message fields (text, body and udh,
                or title and url) and any optional Nexmo parameters
            type: The message type (text, unicode, binary or wappush)

        Returns:
            ParsedResponse: The validated Nexmo response

        Raises:
            InvalidArgumentError: On bad input, before anything is sent
            TransportError: If the Nexmo server could not be reached
            ResponseFormatError: If the response cannot be understood
            ProviderError: If Nexmo rejected the message
        """
        settings = self.snapshot()

        outbound = make_message(type, sender, recipient, message)
        logger.debug(f"Routing {outbound.type.value} message from {sender} to {recipient}")

        fields = build_request_fields(outbound, self._api_key, self._api_secret)
        logger.debug(f"Request fields: {_masked(fields)}")

        result = self._transport(
            'post',
            settings.url,
            {key: str(value) for key, value in fields.items()},
            headers=settings.headers,
            timeout=settings.timeout,
            verify_tls_peer=settings.verify_tls_peer,
        )

        response = parse_and_validate(result.body, settings.endpoint_format)
        logger.info(
            f"SMS sent to {recipient}: {response.message_count} part(s), "
            f"ids={response.message_ids}")
        return response

    def handle_delivery_receipt(self, query_params=None, form_params=None):
        """
        Store a delivery receipt posted by Nexmo.

        Returns:
            int: HTTP status code to answer Nexmo with (always 200)
        """
        self.delivery_receipt_data, status = capture_receiving_data(query_params, form_params)
        return status

    def handle_inbound_message(self, query_params=None, form_params=None):
        """
        Store an inbound message posted by Nexmo.

        Returns:
            int: HTTP status code to answer Nexmo with (always 200)
        """
        self.inbound_message, status = capture_receiving_data(query_params, form_params)
        return status

    def log_sms(self, db_details, message_details):
        """
        Log SMS message into MySQL database

        Args:
            db_details: Connection settings (host, user, password, database)
                plus the 'table' to insert into
            message_details: Mapping of column name to value

        Returns:
            bool: True if the message was stored
        """
        db_config = dict(db_details)
        table = db_config.pop('table')
        db = connect_database(db_config)
        try:
            return insert(db, table, message_details)
        finally:
            db.close()
