import pytest
import requests
from unittest.mock import Mock
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.cars.models import Car
from apps.groups.models import Group, GroupMembership


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def driver(db):
    return User.objects.create_user(
        email='driver@example.com',
        password='DriverPass123!',
        first_name='Dana',
        last_name='Driver',
    )


@pytest.fixture
def passenger(db):
    return User.objects.create_user(
        email='passenger@example.com',
        password='PassengerPass123!',
        first_name='Paul',
        last_name='Passenger',
    )


@pytest.fixture
def outsider(db):
    return User.objects.create_user(
        email='outsider@example.com',
        password='OutsiderPass123!',
    )


@pytest.fixture
def driver_client(driver):
    return _client_for(driver)


@pytest.fixture
def passenger_client(passenger):
    return _client_for(passenger)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)


@pytest.fixture
def group(driver, passenger):
    """Group shared by driver and passenger."""
    group = Group.objects.create(name='Family')
    GroupMembership.objects.create(user=driver, group=group)
    GroupMembership.objects.create(user=passenger, group=group)
    return group


@pytest.fixture
def other_group(outsider):
    group = Group.objects.create(name='Neighbours')
    GroupMembership.objects.create(user=outsider, group=group)
    return group


@pytest.fixture
def car(group):
    """Car that was never parked."""
    return Car.objects.create(group=group, name="Mom's Mazda", icon='sedan')


@pytest.fixture
def parked_car(group):
    return Car.objects.create(
        group=group,
        name='Old Volvo',
        latitude=50.0755,
        longitude=14.4378,
        address='Václavské náměstí 1, Prague',
    )


@pytest.fixture
def claimed_car(car, driver):
    car.currently_in_use = True
    car.currently_used_by = driver
    car.currently_used_by_full_name = driver.get_full_name()
    car.save()
    return car


@pytest.fixture
def geocoder_response():
    """Build a fake requests response for the geocoder."""
    def _build(payload, status_code=200):
        response = Mock(status_code=status_code)
        response.json.return_value = payload
        if status_code >= 400:
            response.raise_for_status.side_effect = requests.HTTPError(f'{status_code} error')
        return response
    return _build
