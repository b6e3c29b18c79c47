"""
Integration tests for the /health endpoint and correlation ID propagation
"""


def test_health_is_public(client, db_session):
    response = client.get('/health')

    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'healthy'
    assert body['checks']['database'] == 'healthy'


def test_correlation_id_is_echoed(client, db_session):
    response = client.get('/health', headers={'X-Correlation-ID': 'test-correlation-123'})

    assert response.headers['X-Correlation-ID'] == 'test-correlation-123'


def test_correlation_id_is_generated(client, db_session):
    response = client.get('/health')

    assert response.headers['X-Correlation-ID']


def test_unknown_route_returns_json(client, db_session):
    response = client.get('/does-not-exist')

    assert response.status_code == 404
    assert response.get_json()['error'] == 'Not Found'
