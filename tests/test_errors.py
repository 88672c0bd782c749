def test_404_json_envelope(client):
    resp = client.get('/no/such/route')
    assert resp.status_code == 404
    data = resp.get_json()
    assert data['status'] == 'error'
    assert data['code'] == 404
    assert isinstance(data.get('error'), str)


def test_unexpected_500_json_envelope(client):
    resp = client.get('/__boom')
    assert resp.status_code == 500
    data = resp.get_json()
    assert data['status'] == 'error'
    assert data['code'] == 500
    assert 'boom' not in data['message']


def test_ok_helper_endpoint(client):
    resp = client.get('/__ok')
    assert resp.status_code == 200
    assert resp.get_json() == {
        'status': 'success',
        'message': 'success',
        'data': {'ping': 'pong'}
    }


def test_schema_errors_are_400_with_details(client, member_headers, api):
    resp = client.post(f"{api}/orders", json={"customer_name": "A", "items": [{"name": "x"}]}, headers=member_headers)
    assert resp.status_code == 400
    data = resp.get_json()
    assert data['status'] == 'error'
    assert any('quantity' in '.'.join(map(str, d['loc'])) for d in data['details'])


def test_wrong_method_is_405(client, api):
    resp = client.patch(f"{api}/reports")
    assert resp.status_code == 405
    assert resp.get_json()['code'] == 405
