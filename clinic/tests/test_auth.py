import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from clinic.models import AuditEvent, User

pytestmark = pytest.mark.django_db


def login(client, username, password):
    r = client.post(reverse('login_view'), {'username': username, 'password': password}, format='json')
    assert r.status_code in (200, 400, 401)
    return r


def test_login_returns_jwt_and_token(doctor):
    client = APIClient()
    r = login(client, 'sarah@medivibe.test', 'P@ssw0rd1')
    assert r.status_code == 200
    assert r.data['success'] is True
    data = r.data['data']
    assert data['token'] and data['access'] and data['refresh']
    assert data['user'] == {'id': doctor.id, 'name': 'Sarah Johnson', 'email': 'sarah@medivibe.test', 'role': 'doctor'}


def test_login_by_email_is_case_insensitive(doctor):
    client = APIClient()
    r = client.post(reverse('login_view'), {'email': 'Sarah@MediVibe.test', 'password': 'P@ssw0rd1'}, format='json')
    assert r.status_code == 200


def test_both_token_schemes_authenticate(doctor):
    client = APIClient()
    data = login(client, 'sarah@medivibe.test', 'P@ssw0rd1').data['data']

    client.credentials(HTTP_AUTHORIZATION=f"Token {data['token']}")
    assert client.get('/api/doctor/duties').status_code == 200

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['access']}")
    assert client.get('/api/doctor/duties').status_code == 200



def test_me_returns_the_login_user_block(doctor):
    client = APIClient()
    data = login(client, 'sarah@medivibe.test', 'P@ssw0rd1').data['data']

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['access']}")
    r = client.get(reverse('me_view'))
    assert r.status_code == 200
    assert r.data == {'success': True, 'data': data['user']}

    assert client.post(reverse('me_view')).status_code == 405
    assert APIClient().get(reverse('me_view')).status_code == 401


def test_role_in_login_body_is_ignored(nurse):
    client = APIClient()
    r = client.post(reverse('login_view'),
                    {'username': 'emily@medivibe.test', 'password': 'P@ssw0rd1', 'role': 'admin'}, format='json')
    assert r.status_code == 200
    assert r.data['data']['user']['role'] == 'nurse'
    client.credentials(HTTP_AUTHORIZATION=f"Token {r.data['data']['token']}")
    assert client.get('/api/admin/users').status_code == 403
    nurse.refresh_from_db()
    assert nurse.role == 'nurse'


def test_wrong_password_is_audited():
    User.objects.create_user(username='u1', password='P@ssw0rd1', role='staff')
    r = login(APIClient(), 'u1', 'nope')
    assert r.status_code == 401
    assert r.data['error']['code'] == 'invalid_credentials'
    assert AuditEvent.objects.filter(action='login', detail__result='fail').count() == 1


def test_inactive_user_cannot_login(receptionist):
    receptionist.is_active = False
    receptionist.save()
    r = login(APIClient(), 'john@medivibe.test', 'P@ssw0rd1')
    assert r.status_code == 401


def test_missing_account_is_validation_error():
    r = login(APIClient(), '', 'P@ssw0rd1')
    assert r.status_code == 400
    assert r.data['error']['code'] == 'validation_error'


def test_refresh_and_logout(nurse):
    client = APIClient()
    data = login(client, 'emily@medivibe.test', 'P@ssw0rd1').data['data']

    r = client.post(reverse('jwt_refresh_view'), {'refresh': data['refresh']}, format='json')
    assert r.status_code == 200
    assert r.data['data']['access']

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['access']}")
    out = client.post(reverse('jwt_logout_view'), {'refresh': data['refresh']}, format='json')
    assert out.status_code == 200
    assert out.data['data']['blacklisted'] == 1

    again = APIClient().post(reverse('jwt_refresh_view'), {'refresh': data['refresh']}, format='json')
    assert again.status_code == 401

    # The DRF token is revoked as well.
    legacy = APIClient()
    legacy.credentials(HTTP_AUTHORIZATION=f"Token {data['token']}")
    assert legacy.get('/api/nurse/duties').status_code == 401


def test_logout_with_garbage_token(nurse, client_for):
    r = client_for(nurse).post(reverse('jwt_logout_view'), {'refresh': 'not-a-token'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['detail']['field'] == 'refresh'
