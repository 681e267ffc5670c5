"""
Cars app services layer.

Registry operations (add, list, edit, remove) live in car_registry,
claim and parking operations in car_usage, and the address lookups in
geocoding.
"""

from .exceptions import (
    CarsServiceError,
    CarNotFoundError,
    CarValidationError,
    GeocodingError,
)

from .car_registry import (
    add_car_to_group,
    get_car,
    get_cars_for_user,
    get_group_cars,
    update_car_details,
    update_car_note,
    delete_car,
)

from .car_usage import (
    mark_car_as_used,
    update_car_location,
    update_car_address,
    release_claims_held_by,
)

from .geocoding import (
    PlaceCandidate,
    reverse_geocode,
    search_places,
)


__all__ = [
    # Exceptions
    'CarsServiceError',
    'CarNotFoundError',
    'CarValidationError',
    'GeocodingError',

    # Car Registry
    'add_car_to_group',
    'get_car',
    'get_cars_for_user',
    'get_group_cars',
    'update_car_details',
    'update_car_note',
    'delete_car',

    # Car Usage
    'mark_car_as_used',
    'update_car_location',
    'update_car_address',
    'release_claims_held_by',

    # Geocoding
    'PlaceCandidate',
    'reverse_geocode',
    'search_places',
]
