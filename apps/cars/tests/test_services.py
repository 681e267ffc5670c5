"""
Service layer unit tests for cars app.

Tests cover:
- Registry operations and group scoping
- The claim / park state machine
- Best-effort reverse geocoding while parking
- Geocoding client parsing
"""

import pytest
import requests
from uuid import uuid4
from unittest.mock import patch

from apps.cars.models import Car
from apps.groups.models import Group, GroupMembership
from apps.cars.services import (
    add_car_to_group,
    get_car,
    get_cars_for_user,
    get_group_cars,
    update_car_details,
    update_car_note,
    delete_car,
    mark_car_as_used,
    update_car_location,
    update_car_address,
    release_claims_held_by,
    reverse_geocode,
    search_places,
    PlaceCandidate,
)
from apps.cars.services.exceptions import (
    CarNotFoundError,
    CarValidationError,
    GeocodingError,
)
from apps.groups.services.exceptions import GroupNotFoundError, NotMemberError

REVERSE_PAYLOAD = {
    'display_name': '12, Main Street, Springfield, USA',
    'address': {'road': 'Main Street', 'house_number': '12', 'city': 'Springfield'},
}


# =============================================================================
# Car Registry Service Tests
# =============================================================================

@pytest.mark.django_db
class TestCarRegistry:
    """Tests for car_registry.py service functions."""

    def test_add_car_is_unparked_and_unclaimed(self, group, driver):
        car = add_car_to_group(group_id=group.id, user=driver, name='  Old Volvo ', icon='wagon')

        assert car.name == 'Old Volvo'
        assert car.group == group
        assert car.location is None
        assert car.currently_in_use is False
        assert car.currently_used_by is None
        assert list(group.cars.all()) == [car]

    def test_add_car_empty_name(self, group, driver):
        with pytest.raises(CarValidationError):
            add_car_to_group(group_id=group.id, user=driver, name='')

    def test_add_car_non_member(self, group, outsider):
        with pytest.raises(NotMemberError):
            add_car_to_group(group_id=group.id, user=outsider, name='Sneaky')

        assert Car.objects.count() == 0

    def test_add_car_missing_group(self, driver):
        with pytest.raises(GroupNotFoundError):
            add_car_to_group(group_id=uuid4(), user=driver, name='Lost')

    def test_get_car_not_found(self, db):
        with pytest.raises(CarNotFoundError):
            get_car(car_id=uuid4())

    def test_get_cars_for_user_spans_groups(self, driver, group, car):
        work = Group.objects.create(name='Work')
        GroupMembership.objects.create(group=work, user=driver)
        van = Car.objects.create(group=work, name='Delivery Van')

        cars = get_cars_for_user(user=driver)

        assert {c.id for c in cars} == {car.id, van.id}
        assert {c.group.name for c in cars} == {'Family', 'Work'}

    def test_get_cars_for_user_without_groups(self, outsider):
        assert get_cars_for_user(user=outsider) == []

    def test_get_group_cars(self, group, car, other_group):
        Car.objects.create(group=other_group, name='Not ours')

        assert get_group_cars(group_id=group.id) == [car]

    def test_update_car_details(self, car):
        updated = update_car_details(car_id=car.id, name='Mazda 3')

        assert updated.name == 'Mazda 3'
        assert updated.icon == 'sedan'

    def test_update_car_details_blank_name(self, car):
        with pytest.raises(CarValidationError):
            update_car_details(car_id=car.id, name='  ')

    def test_update_car_note_overwrites(self, car):
        update_car_note(car_id=car.id, note='Tank is half full')
        updated = update_car_note(car_id=car.id, note='Parked in garage B')

        assert updated.note == 'Parked in garage B'

    def test_delete_car(self, group, car):
        delete_car(group_id=group.id, car_id=car.id)

        assert not Car.objects.filter(id=car.id).exists()
        assert group.cars.count() == 0

    def test_delete_car_of_other_group(self, other_group, car):
        with pytest.raises(CarNotFoundError):
            delete_car(group_id=other_group.id, car_id=car.id)

        assert Car.objects.filter(id=car.id).exists()


# =============================================================================
# Car Usage Service Tests
# =============================================================================

@pytest.mark.django_db
class TestCarUsage:
    """Tests for the claim / park state machine."""

    def test_mark_car_as_used(self, car, driver):
        car = mark_car_as_used(car_id=car.id, user=driver)

        assert car.currently_in_use is True
        assert car.currently_used_by == driver
        assert car.currently_used_by_full_name == 'Dana Driver'

    def test_second_claim_overwrites_first(self, claimed_car, passenger):
        car = mark_car_as_used(car_id=claimed_car.id, user=passenger)

        assert car.currently_used_by == passenger
        assert car.currently_used_by_full_name == 'Paul Passenger'

    def test_non_member_cannot_claim(self, car, outsider):
        with pytest.raises(NotMemberError):
            mark_car_as_used(car_id=car.id, user=outsider)

        car.refresh_from_db()
        assert car.currently_in_use is False

    @patch('apps.cars.services.car_usage.reverse_geocode', return_value='Main Street 12, Springfield')
    def test_park_releases_claim_and_resolves_address(self, geocode, claimed_car, passenger):
        """Any member may park a car someone else was using."""
        car = update_car_location(car_id=claimed_car.id, latitude=40.1, longitude=-75.2, user=passenger)

        geocode.assert_called_once_with(40.1, -75.2)
        assert car.location == (40.1, -75.2)
        assert car.address == 'Main Street 12, Springfield'
        assert car.currently_in_use is False
        assert car.currently_used_by is None
        assert car.currently_used_by_full_name == ''

    @patch('apps.cars.services.car_usage.reverse_geocode', side_effect=GeocodingError('down'))
    def test_park_keeps_location_when_geocoding_fails(self, geocode, claimed_car, driver):
        car = update_car_location(car_id=claimed_car.id, latitude=10.0, longitude=20.0, user=driver)

        assert car.location == (10.0, 20.0)
        assert car.currently_in_use is False
        assert car.currently_used_by is None
        assert car.address == ''

    @pytest.mark.parametrize('latitude, longitude', [(91, 0), (-91, 0), (0, 181), (0, -181)])
    def test_park_rejects_invalid_coordinates(self, car, driver, latitude, longitude):
        with pytest.raises(CarValidationError):
            update_car_location(car_id=car.id, latitude=latitude, longitude=longitude, user=driver)

        car.refresh_from_db()
        assert car.location is None

    @patch('apps.cars.services.car_usage.reverse_geocode', return_value='Somewhere')
    def test_park_non_member(self, geocode, car, outsider):
        with pytest.raises(NotMemberError):
            update_car_location(car_id=car.id, latitude=1.0, longitude=1.0, user=outsider)

        geocode.assert_not_called()

    def test_update_car_address(self, parked_car):
        car = update_car_address(car_id=parked_car.id, address='Main Street 1, Springfield')

        assert car.address == 'Main Street 1, Springfield'
        assert car.location == (50.0755, 14.4378)

    def test_update_car_address_missing_car(self, db):
        with pytest.raises(CarNotFoundError):
            update_car_address(car_id=uuid4(), address='Nowhere')

    def test_release_claims_held_by_group(self, claimed_car, driver, other_group):
        foreign = Car.objects.create(
            group=other_group,
            name='Borrowed',
            currently_in_use=True,
            currently_used_by=driver,
            currently_used_by_full_name='Dana Driver',
        )

        released = release_claims_held_by(user=driver, group_id=claimed_car.group_id)

        assert released == 1
        claimed_car.refresh_from_db()
        foreign.refresh_from_db()
        assert claimed_car.currently_used_by is None
        assert foreign.currently_used_by == driver

    def test_release_claims_leaves_other_users_claims(self, claimed_car, passenger):
        assert release_claims_held_by(user=passenger) == 0

        claimed_car.refresh_from_db()
        assert claimed_car.currently_in_use is True


# =============================================================================
# Geocoding Client Tests
# =============================================================================

class TestGeocoding:
    """Tests for the Nominatim client."""

    def test_reverse_geocode_formats_address(self, geocoder_response):
        with patch('apps.cars.services.geocoding.requests.get',
                   return_value=geocoder_response(REVERSE_PAYLOAD)) as get:
            address = reverse_geocode(40.1, -75.2)

        assert address == 'Main Street 12, Springfield'
        params = get.call_args.kwargs['params']
        assert params['lat'] == 40.1
        assert params['lon'] == -75.2
        assert 'User-Agent' in get.call_args.kwargs['headers']

    def test_reverse_geocode_falls_back_to_display_name(self, geocoder_response):
        payload = {'display_name': 'Middle of the ocean', 'address': {}}
        with patch('apps.cars.services.geocoding.requests.get', return_value=geocoder_response(payload)):
            assert reverse_geocode(0.5, 0.5) == 'Middle of the ocean'

    def test_reverse_geocode_no_result(self, geocoder_response):
        payload = {'error': 'Unable to geocode'}
        with patch('apps.cars.services.geocoding.requests.get', return_value=geocoder_response(payload)):
            with pytest.raises(GeocodingError):
                reverse_geocode(0.0, 0.0)

    def test_reverse_geocode_http_error(self, geocoder_response):
        with patch('apps.cars.services.geocoding.requests.get',
                   return_value=geocoder_response({}, status_code=503)):
            with pytest.raises(GeocodingError):
                reverse_geocode(1.0, 1.0)

    def test_reverse_geocode_network_error(self):
        with patch('apps.cars.services.geocoding.requests.get',
                   side_effect=requests.ConnectionError('offline')):
            with pytest.raises(GeocodingError):
                reverse_geocode(1.0, 1.0)

    def test_search_places(self, geocoder_response):
        payload = [
            {
                'name': 'Central Station',
                'display_name': 'Central Station, Main Street, Springfield',
                'lat': '40.5',
                'lon': '-75.5',
                'address': {'road': 'Main Street', 'city': 'Springfield'},
            },
            {'display_name': 'Broken entry without coordinates'},
        ]
        with patch('apps.cars.services.geocoding.requests.get',
                   return_value=geocoder_response(payload)) as get:
            places = search_places('Central STATION')

        assert places == [
            PlaceCandidate(
                name='Central Station',
                address='Main Street, Springfield',
                latitude=40.5,
                longitude=-75.5,
            )
        ]
        assert get.call_args.kwargs['params']['q'] == 'central station'

    def test_search_places_blank_query(self):
        with patch('apps.cars.services.geocoding.requests.get') as get:
            assert search_places('   ') == []

        get.assert_not_called()
