from conftest import PASSWORD, register


def test_health_and_index(client):
    health = client.get('/health')
    assert health.status_code == 200
    body = health.get_json()
    assert body['status'] == 'healthy'
    assert body['labels_loaded'] is True
    assert body['analysis']['labels'] == 34

    assert client.get('/').get_json()['name'] == 'PlantScan API'


def test_unknown_route_returns_json_404(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json()['success'] is False


def test_register_defaults_to_free_tier(client):
    response = client.post('/api/auth/register', json={
        'email': 'New@Example.com',
        'password': PASSWORD
    })

    assert response.status_code == 201
    body = response.get_json()
    assert body['user']['email'] == 'new@example.com'
    assert body['user']['subscription_tier'] == 'free'
    assert body['subscription']['has_premium_access'] is False
    assert body['access_token'] and body['refresh_token']


def test_register_validation(client):
    missing = client.post('/api/auth/register', json={'email': 'a@example.com'})
    assert missing.status_code == 400
    assert missing.get_json()['missing_fields'] == ['password']

    bad_email = client.post('/api/auth/register', json={'email': 'nope', 'password': PASSWORD})
    assert bad_email.status_code == 400

    weak = client.post('/api/auth/register', json={'email': 'a@example.com', 'password': 'short'})
    assert weak.status_code == 400

    not_json = client.post('/api/auth/register', data='email=a')
    assert not_json.status_code == 400


def test_register_duplicate_email(client, free_user):
    response = client.post('/api/auth/register', json={
        'email': free_user['email'],
        'password': PASSWORD
    })
    assert response.status_code == 409


def test_login(client, free_user):
    ok = client.post('/api/auth/login', json={'email': free_user['email'], 'password': PASSWORD})
    assert ok.status_code == 200
    assert ok.get_json()['user']['last_login'] is not None

    wrong = client.post('/api/auth/login', json={'email': free_user['email'], 'password': 'Wrong1234'})
    assert wrong.status_code == 401

    unknown = client.post('/api/auth/login', json={'email': 'x@example.com', 'password': PASSWORD})
    assert unknown.status_code == 401


def test_refresh(client, free_user):
    response = client.post('/api/auth/refresh', headers=free_user['refresh_headers'])
    assert response.status_code == 200
    assert response.get_json()['access_token']

    # Access tokens are not refresh tokens
    assert client.post('/api/auth/refresh', headers=free_user['headers']).status_code in (401, 422)


def test_profile_requires_token(client):
    response = client.get('/api/auth/profile')
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Authorization Required'


def test_invalid_token(client):
    response = client.get('/api/auth/profile', headers={'Authorization': 'Bearer not.a.token'})
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Invalid Token'


def test_profile_get_and_update(client, free_user):
    profile = client.get('/api/auth/profile', headers=free_user['headers'])
    assert profile.status_code == 200
    assert profile.get_json()['data']['subscription']['tier'] == 'free'

    updated = client.put('/api/auth/profile', headers=free_user['headers'], json={
        'first_name': '  Ada ',
        'phone': ''
    })
    assert updated.status_code == 200
    data = updated.get_json()['data']
    assert data['first_name'] == 'Ada'


def test_change_password(client, free_user):
    wrong = client.post('/api/auth/change-password', headers=free_user['headers'], json={
        'current_password': 'Wrong1234',
        'new_password': 'NewPassword1'
    })
    assert wrong.status_code == 401

    ok = client.post('/api/auth/change-password', headers=free_user['headers'], json={
        'current_password': PASSWORD,
        'new_password': 'NewPassword1'
    })
    assert ok.status_code == 200

    login = client.post('/api/auth/login', json={'email': free_user['email'], 'password': 'NewPassword1'})
    assert login.status_code == 200


def test_logout(client, free_user):
    assert client.post('/api/auth/logout', headers=free_user['headers']).status_code == 200


def test_register_helper_tokens_work(client):
    account = register(client, 'helper@example.com')
    assert client.get('/api/auth/profile', headers=account['headers']).status_code == 200
