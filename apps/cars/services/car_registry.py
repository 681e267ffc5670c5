"""
Car registry service.

Handles adding cars to groups, listing them, editing their details and
removing them.
"""

import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.cars.models import Car
from apps.groups.models import Group
from apps.groups.services.exceptions import GroupNotFoundError, NotMemberError

from .exceptions import CarNotFoundError, CarValidationError

logger = logging.getLogger(__name__)


@transaction.atomic
def add_car_to_group(*, group_id: UUID, user: User, name: str, icon: str = '') -> Car:
    """
    Add a new, never parked car to a group.

    Args:
        group_id: UUID of the group
        user: Member adding the car
        name: Car name (e.g. "Mom's Mazda")
        icon: Optional icon identifier shown by the client

    Returns:
        Created Car instance

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member
        CarValidationError: If the name is empty
    """
    name = (name or '').strip()
    if not name:
        raise CarValidationError("Car name is required")

    try:
        group = Group.objects.get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.has_member(user):
        raise NotMemberError("You must be a member to add cars to this group")

    car = Car.objects.create(group=group, name=name, icon=icon or '')

    logger.info("User %s added car %s to group %s", user.id, car.id, group.id)
    return car


def get_car(*, car_id: UUID) -> Car:
    """
    Raises:
        CarNotFoundError: If car doesn't exist
    """
    try:
        return Car.objects.select_related('group').get(id=car_id)
    except Car.DoesNotExist:
        raise CarNotFoundError(f"Car with ID {car_id} not found")


def get_cars_for_user(*, user: User) -> List[Car]:
    """
    Return the cars of every group the user belongs to.

    Each car carries its group via select_related so the group name is
    available without extra queries. A user without groups gets [].
    """
    return list(
        Car.objects
        .filter(group__memberships__user=user)
        .select_related('group', 'currently_used_by')
        .order_by('group__name', 'name')
        .distinct()
    )


def get_group_cars(*, group_id: UUID) -> List[Car]:
    """
    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    if not Group.objects.filter(id=group_id).exists():
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    return list(
        Car.objects
        .filter(group_id=group_id)
        .select_related('group', 'currently_used_by')
    )


@transaction.atomic
def update_car_details(
    *,
    car_id: UUID,
    name: Optional[str] = None,
    icon: Optional[str] = None
) -> Car:
    """
    Rename a car or change its icon.

    Raises:
        CarNotFoundError: If car doesn't exist
        CarValidationError: If the new name is empty
    """
    try:
        car = Car.objects.select_for_update().get(id=car_id)
    except Car.DoesNotExist:
        raise CarNotFoundError(f"Car with ID {car_id} not found")

    update_fields = ['updated_at']

    if name is not None:
        name = name.strip()
        if not name:
            raise CarValidationError("Car name is required")
        car.name = name
        update_fields.append('name')

    if icon is not None:
        car.icon = icon
        update_fields.append('icon')

    car.save(update_fields=update_fields)
    return car


def update_car_note(*, car_id: UUID, note: str) -> Car:
    """
    Overwrite the note of a car (last writer wins).

    Raises:
        CarNotFoundError: If car doesn't exist
    """
    updated = Car.objects.filter(id=car_id).update(note=note or '', updated_at=timezone.now())
    if not updated:
        raise CarNotFoundError(f"Car with ID {car_id} not found")

    return get_car(car_id=car_id)


@transaction.atomic
def delete_car(*, group_id: UUID, car_id: UUID) -> None:
    """
    Remove a car from its group.

    Raises:
        CarNotFoundError: If the car doesn't exist in that group
    """
    deleted, _ = Car.objects.filter(id=car_id, group_id=group_id).delete()
    if not deleted:
        raise CarNotFoundError(f"Car with ID {car_id} not found in group {group_id}")

    logger.info("Deleted car %s from group %s", car_id, group_id)
