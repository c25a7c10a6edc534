import pytest

from nexmo_sms.errors import EncodingError, MissingParameterError, UnsupportedTypeError
from nexmo_sms.message import (
    BinaryMessage,
    MessageType,
    TextMessage,
    WapPushMessage,
    build_request_fields,
    make_message,
)


KEY, SECRET = 'key', 'secret'


class TestMessageType:
    @pytest.mark.parametrize('name, expected', [
        ('text', MessageType.TEXT),
        ('TEXT', MessageType.TEXT),
        (' Unicode ', MessageType.UNICODE),
        ('binary', MessageType.BINARY),
        ('WapPush', MessageType.WAPPUSH),
    ])
    def test_from_name(self, name, expected):
        assert MessageType.from_name(name) is expected

    def test_unknown_type(self):
        with pytest.raises(UnsupportedTypeError) as exc_info:
            MessageType.from_name('carrierpigeon')
        assert exc_info.value.type == 'carrierpigeon'


class TestMakeMessage:
    def test_text(self):
        message = make_message('text', 'Acme', '15551234567', {'text': 'Hello', 'client-ref': 'x1'})
        assert message == TextMessage('Acme', '15551234567', 'Hello', extra={'client-ref': 'x1'})

    def test_unicode_keeps_type(self):
        message = make_message('UNICODE', 'Acme', '1555', {'text': 'Hi'})
        assert message.type is MessageType.UNICODE

    def test_binary(self):
        message = make_message('binary', 'Acme', '1555', {'body': b'\x00', 'udh': b'\x05'})
        assert isinstance(message, BinaryMessage)
        assert message.body == b'\x00'

    def test_wappush(self):
        message = make_message('wappush', 'Acme', '1555', {'title': 'T', 'url': 'https://a.b'})
        assert isinstance(message, WapPushMessage)

    def test_message_keys_are_not_overridden_by_fields(self):
        message = make_message('text', 'Acme', '1555', {'text': 'Hi', 'from': 'Other', 'type': 'binary'})
        assert message.to_params()['from'] == 'Acme'
        assert message.to_params()['type'] == 'text'

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedTypeError):
            make_message('mms', 'Acme', '1555', {'text': 'Hi'})


class TestTextFields:
    def test_gsm_text_stays_text(self):
        fields = build_request_fields(TextMessage('Acme', '1555', 'Hello'), KEY, SECRET)
        assert fields == {
            'from': 'Acme',
            'to': '1555',
            'text': 'Hello',
            'type': 'text',
            'api_key': KEY,
            'api_secret': SECRET,
        }

    def test_non_gsm_text_becomes_unicode(self):
        fields = build_request_fields(TextMessage('Acme', '1555', 'Only 5€'), KEY, SECRET)
        assert fields['type'] == 'unicode'

    def test_explicit_unicode_is_not_downgraded(self):
        message = TextMessage('Acme', '1555', 'Hello', type=MessageType.UNICODE)
        assert build_request_fields(message, KEY, SECRET)['type'] == 'unicode'

    def test_text_is_not_url_encoded(self):
        fields = build_request_fields(TextMessage('Acme Inc', '1555', 'a b&c'), KEY, SECRET)
        assert fields['text'] == 'a b&c'
        assert fields['from'] == 'Acme Inc'

    def test_numeric_sender(self):
        fields = build_request_fields(TextMessage('447700900000', '1555', 'Hi'), KEY, SECRET)
        assert fields['from'] == '447700900000'

    def test_utf8_bytes_are_decoded(self):
        message = TextMessage('Acme'.encode('utf-8'), '1555', 'Grüße'.encode('utf-8'))
        fields = build_request_fields(message, KEY, SECRET)
        assert fields['from'] == 'Acme'
        assert fields['text'] == 'Grüße'

    def test_invalid_utf8_text(self):
        with pytest.raises(EncodingError, match='SMS message'):
            build_request_fields(TextMessage('Acme', '1555', b'\xff\xfe'), KEY, SECRET)

    def test_invalid_utf8_sender(self):
        with pytest.raises(EncodingError, match='from parameter'):
            build_request_fields(TextMessage(b'\xff', '1555', 'Hi'), KEY, SECRET)

    def test_missing_text(self):
        with pytest.raises(MissingParameterError) as exc_info:
            build_request_fields(TextMessage('Acme', '1555', ''), KEY, SECRET)
        assert exc_info.value.keys == ('text',)

    def test_missing_recipient(self):
        with pytest.raises(MissingParameterError) as exc_info:
            build_request_fields(TextMessage('Acme', None, 'Hi'), KEY, SECRET)
        assert exc_info.value.keys == ('to',)

    def test_extra_fields_pass_through(self):
        message = TextMessage('Acme', '1555', 'Hi', extra={'status-report-req': 1, 'callback': ''})
        fields = build_request_fields(message, KEY, SECRET)
        assert fields['status-report-req'] == 1
        assert 'callback' not in fields


class TestBinaryFields:
    def test_hex_encodes_body_and_udh(self):
        message = BinaryMessage('Acme', '1555', bytes([0x00, 0xFF]), b'\x05\x00\x03\xAB')
        fields = build_request_fields(message, KEY, SECRET)
        assert fields['body'] == '00ff'
        assert fields['udh'] == '050003ab'
        assert fields['type'] == 'binary'

    def test_missing_udh(self):
        with pytest.raises(MissingParameterError) as exc_info:
            build_request_fields(BinaryMessage('Acme', '1555', b'\x01', b''), KEY, SECRET)
        assert exc_info.value.keys == ('udh',)


class TestWapPushFields:
    def test_fields(self):
        message = WapPushMessage('Acme', '1555', 'News', 'https://example.com/?a=1&b=2')
        fields = build_request_fields(message, KEY, SECRET)
        assert fields['type'] == 'wappush'
        assert fields['title'] == 'News'
        assert fields['url'] == 'https://example.com/?a=1&b=2'

    def test_invalid_utf8_title(self):
        with pytest.raises(EncodingError, match='title and url'):
            build_request_fields(WapPushMessage('Acme', '1555', b'\xc3\x28', 'https://a.b'), KEY, SECRET)

    def test_missing_url(self):
        with pytest.raises(MissingParameterError) as exc_info:
            build_request_fields(WapPushMessage('Acme', '1555', 'News', None), KEY, SECRET)
        assert exc_info.value.keys == ('url',)


def test_missing_credentials():
    with pytest.raises(MissingParameterError) as exc_info:
        build_request_fields(TextMessage('Acme', '1555', 'Hi'), None, None)
    assert exc_info.value.keys == ('api_key', 'api_secret')
