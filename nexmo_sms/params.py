"""
Parameter Filter Module

Merges caller parameters with the API credentials, removes blank values and
checks that every required parameter survived.
"""

from .errors import MissingParameterError


CREDENTIAL_KEYS = ('api_key', 'api_secret')


def filter_params(params, required=(), api_key=None, api_secret=None):
    """
    Filter parameters that will be sent to the Nexmo API.

    Args:
        params: Mapping of caller supplied parameters
        required: Keys that must be present after filtering
        api_key: Client API key, overrides any caller supplied value
        api_secret: Client API secret, overrides any caller supplied value

    Returns:
        dict: The parameters with every falsy value removed

    Raises:
        MissingParameterError: If a required key is missing or blank
    """
    merged = dict(params)
    merged['api_key'] = api_key
    merged['api_secret'] = api_secret

    filtered = {key: value for key, value in merged.items() if value}

    missing = []
    for key in CREDENTIAL_KEYS + tuple(required):
        if key not in filtered and key not in missing:
            missing.append(key)
    if missing:
        raise MissingParameterError(missing)

    return filtered
