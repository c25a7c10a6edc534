"""
Inbound Data Module

Captures data pushed by Nexmo to our callback URLs (delivery receipts and
inbound messages). The payload is kept as an opaque key/value mapping.
"""

import logging

logger = logging.getLogger('NexmoSMS')

# Nexmo retries a callback until it gets a 200, whatever the payload
CALLBACK_STATUS = 200


def capture_receiving_data(query_params=None, form_params=None):
    """
    Capture the parameters of a Nexmo callback request.

    Query string parameters are used when present, otherwise the form body.

    Args:
        query_params: Mapping of the request query string parameters
        form_params: Mapping of the request form body parameters

    Returns:
        tuple: (data: dict, status_code: int)
    """
    if query_params:
        data = dict(query_params)
    elif form_params:
        data = dict(form_params)
    else:
        data = {}
        logger.warning("Received a Nexmo callback without any parameters")

    logger.debug(f"Captured callback data: {sorted(data)}")
    return data, CALLBACK_STATUS
