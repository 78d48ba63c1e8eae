"""
Homes app services layer.

Homes soft-delete; areas and rooms hard-delete behind referential checks.
"""

from .exceptions import (
    HomesServiceError,
    HomeNotFoundError,
    HomeImageNotFoundError,
    AreaNotFoundError,
    RoomNotFoundError,
    AreaHasRoomsError,
)

from .home_management import (
    create_home,
    get_home,
    list_homes,
    update_home,
    soft_delete_home,
    list_home_images,
    add_home_image,
    delete_home_image,
)

from .area_management import (
    create_area,
    get_area,
    list_areas,
    update_area,
    can_delete_area,
    delete_area,
    create_room,
    get_room,
    list_rooms,
    update_room,
    delete_room,
)


__all__ = [
    # Exceptions
    'HomesServiceError',
    'HomeNotFoundError',
    'HomeImageNotFoundError',
    'AreaNotFoundError',
    'RoomNotFoundError',
    'AreaHasRoomsError',

    # Homes
    'create_home',
    'get_home',
    'list_homes',
    'update_home',
    'soft_delete_home',
    'list_home_images',
    'add_home_image',
    'delete_home_image',

    # Areas & rooms
    'create_area',
    'get_area',
    'list_areas',
    'update_area',
    'can_delete_area',
    'delete_area',
    'create_room',
    'get_room',
    'list_rooms',
    'update_room',
    'delete_room',
]
