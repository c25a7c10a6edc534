import pytest

from nexmo_sms.transport import TransportResult


JSON_SUCCESS = (
    '{"message-count":"1","messages":[{"to":"15551234567",'
    '"message-id":"0A0000000123ABCD1","status":"0",'
    '"remaining-balance":"3.14159265","message-price":"0.03330000",'
    '"network":"12345"}]}'
)

JSON_PROVIDER_ERROR = (
    '{"message-count":"1","messages":[{"status":"1","error-text":"Missing params"}]}'
)

XML_SUCCESS = (
    '<?xml version="1.0" encoding="UTF-8" ?>'
    '<mt-submission-response>'
    '<messages count="1">'
    '<message>'
    '<to>15551234567</to>'
    '<messageId>0A0000000123ABCD1</messageId>'
    '<status>0</status>'
    '<remainingBalance>3.14159265</remainingBalance>'
    '<messagePrice>0.03330000</messagePrice>'
    '<network>12345</network>'
    '</message>'
    '</messages>'
    '</mt-submission-response>'
)

XML_PROVIDER_ERROR = (
    '<?xml version="1.0" encoding="UTF-8" ?>'
    '<mt-submission-response>'
    '<messages count="1">'
    '<message><status>2</status><errorText>Missing from param</errorText></message>'
    '</messages>'
    '</mt-submission-response>'
)


class StubTransport:
    """Transport callable that records its calls and returns a canned body"""

    def __init__(self, body=JSON_SUCCESS, status_code=200):
        self.body = body
        self.status_code = status_code
        self.calls = []

    def __call__(self, method, url, fields, headers=None, timeout=None, verify_tls_peer=None):
        self.calls.append({
            'method': method,
            'url': url,
            'fields': fields,
            'headers': headers,
            'timeout': timeout,
            'verify_tls_peer': verify_tls_peer,
        })
        return TransportResult(body=self.body, status_code=self.status_code)

    @property
    def call_count(self):
        return len(self.calls)


@pytest.fixture
def stub_transport():
    return StubTransport()
