import pytest

from authentication.models import Business, CustomUser
from catalog.models import BusinessSettings

REGISTRATION = {
    'name': 'Maria Souza',
    'business_name': 'Pizzaria da Maria',
    'email': 'Maria@Pizzaria.com',
    'password': 'SenhaSegura123',
}


@pytest.mark.django_db
def test_register_business_creates_owner_business_and_settings(api_client):
    response = api_client.post('/auth/register/', REGISTRATION, format='json')

    assert response.status_code == 201
    business = Business.objects.get()
    assert business.slug == 'pizzaria-da-maria'
    assert business.owner.email == 'maria@pizzaria.com'
    assert BusinessSettings.objects.filter(business=business).exists()


@pytest.mark.django_db
def test_slugs_are_unique(api_client):
    api_client.post('/auth/register/', REGISTRATION, format='json')
    response = api_client.post(
        '/auth/register/', dict(REGISTRATION, email='outra@pizzaria.com'), format='json'
    )

    assert response.json()['business']['slug'] == 'pizzaria-da-maria-2'


@pytest.mark.django_db
def test_duplicate_email_is_rejected(api_client):
    api_client.post('/auth/register/', REGISTRATION, format='json')
    response = api_client.post('/auth/register/', REGISTRATION, format='json')

    assert response.status_code == 400
    assert 'email' in response.json()['details']


@pytest.mark.django_db
def test_login_returns_tokens_and_business(api_client, business):
    response = api_client.post(
        '/auth/login/', {'email': 'maria@pizzaria.com', 'password': 'SenhaSegura123'}, format='json'
    )

    assert response.status_code == 200
    data = response.json()
    assert data['access'] and data['refresh']
    assert data['business']['slug'] == business.slug


@pytest.mark.django_db
def test_login_with_wrong_password(api_client, business):
    response = api_client.post(
        '/auth/login/', {'email': 'maria@pizzaria.com', 'password': 'errada'}, format='json'
    )

    assert response.status_code == 400
    assert response.json()['details']['non_field_errors'] == ['Invalid email or password']


@pytest.mark.django_db
def test_jwt_grants_access_to_owner_endpoints(api_client, business):
    login = api_client.post(
        '/auth/login/', {'email': 'maria@pizzaria.com', 'password': 'SenhaSegura123'}, format='json'
    ).json()
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login['access']}")

    assert api_client.get('/orders/kitchen/').status_code == 200


@pytest.mark.django_db
def test_owner_endpoints_require_authentication(api_client):
    response = api_client.get('/orders/kitchen/')

    assert response.status_code == 401
    assert response.json()['error'] is True


@pytest.mark.django_db
def test_user_without_business_is_refused(api_client):
    user = CustomUser.objects.create_user(email='semnegocio@pedinu.com', password='SenhaSegura123', name='Sem')
    api_client.force_authenticate(user=user)

    assert api_client.get('/menu/categories/').status_code == 403


@pytest.mark.django_db
def test_platform_admin_acts_on_business_by_header(admin_client, business, category):
    response = admin_client.get('/menu/categories/', HTTP_X_BUSINESS_SLUG=business.slug)

    assert response.status_code == 200
    assert [c['name'] for c in response.json()] == ['Pizzas']


@pytest.mark.django_db
def test_platform_admin_manages_users(admin_client, platform_admin, owner):
    users = admin_client.get('/platform/users/', {'search': 'maria'}).json()
    assert [u['email'] for u in users] == ['maria@pizzaria.com']

    created = admin_client.post(
        '/platform/admins/', {'name': 'Outro', 'email': 'outro@pedinu.com', 'password': 'SenhaSegura123'},
        format='json'
    )
    assert created.status_code == 201
    assert created.json()['is_super_admin'] is True

    assert admin_client.delete(f'/platform/users/{platform_admin.id}/').status_code == 400
    assert admin_client.delete(f'/platform/users/{owner.id}/').status_code == 204


@pytest.mark.django_db
def test_health_check(api_client):
    assert api_client.get('/health/').json()['status'] == 'healthy'
