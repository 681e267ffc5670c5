"""
Car usage service.

A car is either parked (nobody claims it) or in use by one member:

    Parked --mark_car_as_used(X)--> InUse(X)
    InUse(X) --mark_car_as_used(Y)--> InUse(Y)    last write wins
    InUse(X) --update_car_location(any member)--> Parked

Parking always releases the claim, whoever parks the car.
"""

import logging
from typing import Optional
from uuid import UUID

from django.utils import timezone

from apps.accounts.models import User
from apps.cars.models import Car
from apps.groups.models import GroupMembership
from apps.groups.services.exceptions import NotMemberError

from .car_registry import get_car
from .exceptions import CarNotFoundError, CarValidationError, GeocodingError
from .geocoding import reverse_geocode

logger = logging.getLogger(__name__)

RELEASED_CLAIM = {
    'currently_in_use': False,
    'currently_used_by': None,
    'currently_used_by_full_name': '',
}


def _get_car_for_member(car_id: UUID, user: User) -> Car:
    car = get_car(car_id=car_id)
    if not GroupMembership.objects.filter(group_id=car.group_id, user=user).exists():
        raise NotMemberError("You must be a member of the car's group")
    return car


def mark_car_as_used(*, car_id: UUID, user: User) -> Car:
    """
    Claim a car for user.

    There is no check for an existing claim: a second claim silently
    replaces the first.

    Raises:
        CarNotFoundError: If car doesn't exist
        NotMemberError: If user is not in the car's group
    """
    car = _get_car_for_member(car_id, user)

    Car.objects.filter(id=car.id).update(
        currently_in_use=True,
        currently_used_by=user,
        currently_used_by_full_name=user.get_full_name(),
        updated_at=timezone.now(),
    )

    logger.info("User %s claimed car %s", user.id, car.id)
    return get_car(car_id=car.id)


def update_car_location(*, car_id: UUID, latitude: float, longitude: float, user: User) -> Car:
    """
    Park a car at a new location.

    1. Store the coordinates and release any claim in one UPDATE.
    2. Reverse-geocode the coordinates.
    3. Store the resolved address.
    4. Re-read the car.

    Steps 2 and 3 are best effort: when geocoding fails the new location
    and the released claim are kept and the failure is only logged.

    Raises:
        CarValidationError: If the coordinates are out of range
        CarNotFoundError: If car doesn't exist
        NotMemberError: If user is not in the car's group
    """
    if latitude is None or longitude is None:
        raise CarValidationError("Both latitude and longitude are required")
    if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
        raise CarValidationError(f"Invalid coordinates: {latitude}, {longitude}")

    car = _get_car_for_member(car_id, user)

    Car.objects.filter(id=car.id).update(
        latitude=latitude,
        longitude=longitude,
        updated_at=timezone.now(),
        **RELEASED_CLAIM,
    )
    logger.info("User %s parked car %s", user.id, car.id)

    try:
        address = reverse_geocode(latitude, longitude)
    except GeocodingError as e:
        logger.warning("Could not resolve address for car %s: %s", car.id, e)
    else:
        update_car_address(car_id=car.id, address=address)

    return get_car(car_id=car.id)


def update_car_address(*, car_id: UUID, address: str) -> Car:
    """
    Raises:
        CarNotFoundError: If car doesn't exist
    """
    updated = Car.objects.filter(id=car_id).update(address=address, updated_at=timezone.now())
    if not updated:
        raise CarNotFoundError(f"Car with ID {car_id} not found")

    return get_car(car_id=car_id)


def release_claims_held_by(*, user: User, group_id: Optional[UUID] = None) -> int:
    """
    Release every claim user holds, optionally only within one group.

    Returns:
        Number of cars released
    """
    cars = Car.objects.filter(currently_used_by=user)
    if group_id is not None:
        cars = cars.filter(group_id=group_id)

    released = cars.update(updated_at=timezone.now(), **RELEASED_CLAIM)
    if released:
        logger.info("Released %s car claim(s) held by user %s", released, user.id)
    return released
