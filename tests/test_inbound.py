from nexmo_sms.inbound import capture_receiving_data


def test_prefers_query_parameters():
    data, status = capture_receiving_data({'msisdn': '1555'}, {'msisdn': '1666'})
    assert data == {'msisdn': '1555'}
    assert status == 200


def test_falls_back_to_form_parameters():
    data, status = capture_receiving_data({}, {'messageId': 'abc', 'status': 'delivered'})
    assert data == {'messageId': 'abc', 'status': 'delivered'}
    assert status == 200


def test_empty_request_still_answers_200():
    data, status = capture_receiving_data(None, None)
    assert data == {}
    assert status == 200


def test_returns_a_copy():
    query = {'text': 'Hi'}
    data, _ = capture_receiving_data(query)
    data['text'] = 'changed'
    assert query == {'text': 'Hi'}
