
def test_health_check(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_request_id_is_echoed(client):
    response = client.get('/health', headers={'X-Request-ID': 'till-7'})
    assert response.headers['X-Request-ID'] == 'till-7'
    assert response.headers['X-Content-Type-Options'] == 'nosniff'
