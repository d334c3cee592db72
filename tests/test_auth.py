from datetime import datetime, timedelta, timezone

from lightlog.tokens import create_access_token


def register(client, username='carol', password='pw12345', nickname='Carol'):
    return client.post('/api/auth/register', json={
        'username': username, 'password': password, 'nickname': nickname,
    })


def test_register_and_login(client):
    response = register(client)
    assert response.status_code == 200
    assert 'carol' in response.get_json()['message']

    response = client.post('/api/auth/login', json={'username': 'carol', 'password': 'pw12345'})
    assert response.status_code == 200
    token = response.get_json()['token']

    profile = client.get('/api/users/profile', headers={'Authorization': f'Bearer {token}'})
    assert profile.status_code == 200
    assert profile.get_json()['nickname'] == 'Carol'
    assert profile.get_json()['aiTone'] == 'counselor'


def test_duplicate_username_is_rejected(client, user):
    response = register(client, username='alice', nickname='Someone else')
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Username is already taken.'


def test_duplicate_nickname_is_rejected(client, user):
    response = register(client, username='newcomer', nickname='Alice')
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Nickname is already taken.'


def test_missing_fields_are_rejected(client):
    response = client.post('/api/auth/register', json={'username': 'x'})
    assert response.status_code == 400


def test_non_text_fields_are_rejected(client):
    assert register(client, username=12345).status_code == 400
    response = client.post('/api/auth/login', json={'username': ['alice'], 'password': 'x'})
    assert response.status_code == 400
    assert client.post('/api/auth/login', json=['alice', 'x']).status_code == 400


def test_login_with_unknown_user(client):
    response = client.post('/api/auth/login', json={'username': 'ghost', 'password': 'x'})
    assert response.status_code == 400
    assert response.get_json()['message'] == 'User not found'


def test_login_with_wrong_password(client, user):
    response = client.post('/api/auth/login', json={'username': 'alice', 'password': 'wrong'})
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Invalid password'


def test_password_is_stored_hashed(app, user):
    from lightlog.models import User
    with app.app_context():
        stored = User.query.filter_by(username='alice').first()
        assert stored.password != user.password


def test_availability_checks(client, user):
    taken = client.get('/api/auth/check-username?username=alice').get_json()
    free = client.get('/api/auth/check-username?username=zed').get_json()
    assert taken['available'] is False
    assert free['available'] is True

    taken = client.get('/api/auth/check-nickname?nickname=Alice').get_json()
    free = client.get('/api/auth/check-nickname?nickname=Zed').get_json()
    assert taken['available'] is False
    assert free['available'] is True


def test_protected_route_without_token(client):
    response = client.get('/api/diaries/statistics')
    assert response.status_code == 401
    assert response.get_json()['error'] == 'UNAUTHORIZED'


def test_protected_route_with_garbage_token(client, user):
    response = client.get('/api/diaries/statistics', headers={'Authorization': 'Bearer not-a-jwt'})
    assert response.status_code == 401


def test_expired_token_is_treated_as_anonymous(app, client, user):
    with app.app_context():
        issued = datetime.now(timezone.utc) - timedelta(days=30)
        token = create_access_token('alice', now=issued)
    response = client.get('/api/diaries/statistics', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 401


def test_token_for_deleted_user_is_anonymous(app, client):
    with app.app_context():
        token = create_access_token('nobody')
    response = client.get('/api/users/profile', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 401
