import pytest

ADMIN_GETS = ['/api/admin/withdrawals', '/api/admin/verifications', '/api/admin/reports',
              '/api/admin/notifications']


@pytest.mark.parametrize('path', ADMIN_GETS)
def test_admin_routes_require_api_key(client, path, monkeypatch):
    # set admin api key
    monkeypatch.setenv('ADMIN_API_KEY', 'secretkey')

    resp = client.get(path)
    assert resp.status_code == 401
    assert resp.json() == {'success': False, 'error': 'Unauthorized'}

    # with wrong key
    resp = client.get(path, headers={'X-API-KEY': 'wrong'})
    assert resp.status_code == 401

    # with correct key
    resp = client.get(path, headers={'X-API-KEY': 'secretkey'})
    assert resp.status_code == 200


def test_admin_routes_open_without_configured_key(client):
    for path in ADMIN_GETS:
        assert client.get(path).status_code == 200


def test_admin_action_requires_api_key(client, monkeypatch):
    monkeypatch.setenv('ADMIN_API_KEY', 'secretkey')
    resp = client.post('/api/admin/reports/any/action', json={'action': 'resolve'})
    assert resp.status_code == 401
    resp = client.post('/api/admin/reports/any/action', json={'action': 'resolve'},
                       headers={'X-API-KEY': 'secretkey'})
    assert resp.status_code == 404


def test_cron_requires_bearer_secret(client, monkeypatch):
    monkeypatch.setenv('CRON_SECRET', 'bebasaja')
    assert client.post('/api/cron/process-recurring').status_code == 401
    resp = client.post('/api/cron/process-recurring', headers={'Authorization': 'Bearer bebasaja'})
    assert resp.status_code == 200
    assert resp.json()['processedCount'] == 0
