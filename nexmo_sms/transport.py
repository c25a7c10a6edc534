"""
HTTP Transport Module

Performs a single form-encoded HTTP request to the Nexmo server and maps
low-level network failures onto TransportError kinds.
"""

import logging
from dataclasses import dataclass

import requests

from .errors import TransportError, TransportErrorKind, UnsupportedMethodError

logger = logging.getLogger('NexmoSMS')

DEFAULT_HEADERS = {
    'Content-Type': 'application/x-www-form-urlencoded',
}

DEFAULT_TIMEOUT = 60


@dataclass(frozen=True)
class TransportResult:
    body: str
    status_code: int


def send_request(method, url, fields, headers=None, timeout=DEFAULT_TIMEOUT,
                 verify_tls_peer=True):
    """
    Send one HTTP request and return the raw response.

    HTTP error statuses (4xx/5xx) are not treated as failures: Nexmo reports
    errors in the response body, so body and status code are always returned
    once the exchange completes.

    Args:
        method: 'get' or 'post' (any case)
        url: The url used to send the request
        fields: Parameters sent as query string (GET) or form body (POST)
        headers: Extra headers, merged over the default Content-Type
        timeout: Timeout in seconds for the whole request
        verify_tls_peer: Verify the server TLS certificate

    Returns:
        TransportResult: Response body and status code

    Raises:
        UnsupportedMethodError: If method is not GET or POST
        TransportError: If the request could not be completed
    """
    method = str(method).lower()
    if method not in ('get', 'post'):
        raise UnsupportedMethodError(method)

    request_headers = dict(DEFAULT_HEADERS)
    if headers:
        request_headers.update(headers)

    kwargs = {
        'headers': request_headers,
        'timeout': timeout,
        'verify': verify_tls_peer,
    }
    if method == 'get':
        kwargs['params'] = fields
    else:
        kwargs['data'] = fields

    logger.debug(f"{method.upper()} {url} (timeout={timeout}s, verify={verify_tls_peer})")

    try:
        response = requests.request(method.upper(), url, **kwargs)
    except requests.exceptions.SSLError as e:
        if _is_certificate_error(e):
            error = TransportError(
                TransportErrorKind.TLS_VERIFY_FAILED,
                "Could not verify ssl certificate.",
                e,
            )
        else:
            error = TransportError(
                TransportErrorKind.OTHER,
                f"Unexpected SSL error while connecting to Nexmo server ({url}).",
                e,
            )
        logger.error(str(error))
        raise error from e
    except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
        error = TransportError(
            TransportErrorKind.CONNECT_FAILED,
            f"Could not connect to Nexmo server ({url}). "
            "Please check internet connection and try again.",
            e,
        )
        logger.error(str(error))
        raise error from e
    except requests.exceptions.RequestException as e:
        error = TransportError(
            TransportErrorKind.OTHER,
            f"Unexpected error happened while connecting to Nexmo server ({url}).",
            e,
        )
        logger.error(str(error))
        raise error from e

    logger.debug(f"Nexmo server responded with HTTP {response.status_code}")
    return TransportResult(body=response.text, status_code=response.status_code)


def _is_certificate_error(error):
    text = str(error).lower()
    return 'certificate' in text or 'cert_' in text
