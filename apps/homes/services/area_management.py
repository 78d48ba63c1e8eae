"""
Area and room management service.

Areas and rooms are hard-deleted, guarded by referential checks: an area
with rooms cannot be removed until its rooms are gone.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Count, QuerySet

from apps.common.models import deleted
from apps.homes.models import Area, Room

from .exceptions import AreaHasRoomsError, AreaNotFoundError, RoomNotFoundError

logger = logging.getLogger(__name__)

AREA_FIELDS = ('home', 'name', 'name_lt', 'description', 'description_lt', 'budget')
ROOM_FIELDS = ('area', 'name', 'name_lt', 'description', 'description_lt', 'budget')


def _apply(instance, data, allowed):
    for key, value in data.items():
        if key in allowed:
            setattr(instance, key, value)


# =============================================================================
# Areas
# =============================================================================

def create_area(*, name: str, **fields) -> Area:
    area = Area(name=name)
    _apply(area, fields, AREA_FIELDS)
    area.save()
    logger.info('Area %s created', area.id)
    return area


def get_area(*, area_id: UUID) -> Area:
    try:
        return Area.objects.select_related('home').get(id=area_id)
    except Area.DoesNotExist:
        raise AreaNotFoundError(f"Area with ID {area_id} not found")


def list_areas(*, home_id: Optional[UUID] = None) -> QuerySet:
    queryset = (
        Area.objects
        .select_related('home')
        .exclude(deleted('home'))
        .annotate(room_count=Count('rooms'))
    )
    if home_id:
        queryset = queryset.filter(home_id=home_id)
    return queryset


@transaction.atomic
def update_area(*, area_id: UUID, data: dict) -> Area:
    try:
        area = Area.objects.select_for_update().get(id=area_id)
    except Area.DoesNotExist:
        raise AreaNotFoundError(f"Area with ID {area_id} not found")

    _apply(area, data, AREA_FIELDS)
    area.save()
    return area


def can_delete_area(*, area_id: UUID) -> Area:
    """
    Check that an area has no rooms.

    Returns:
        The area, when deletion is allowed

    Raises:
        AreaNotFoundError: If the area doesn't exist
        AreaHasRoomsError: If one or more rooms reference the area
    """
    area = get_area(area_id=area_id)
    room_count = area.rooms.count()
    if room_count:
        logger.warning('Refused to delete area %s: %d room(s) attached', area_id, room_count)
        raise AreaHasRoomsError(
            f"Cannot delete area with {room_count} room(s). Delete or reassign the rooms first."
        )
    return area


@transaction.atomic
def delete_area(*, area_id: UUID) -> None:
    # Lock the area so no room can be attached between check and delete
    Area.objects.select_for_update().filter(id=area_id).first()
    area = can_delete_area(area_id=area_id)
    area.delete()
    logger.info('Area %s deleted', area_id)


# =============================================================================
# Rooms
# =============================================================================

def create_room(*, area: Area, name: str, **fields) -> Room:
    room = Room(area=area, name=name)
    _apply(room, fields, ROOM_FIELDS)
    room.save()
    logger.info('Room %s created in area %s', room.id, area.id)
    return room


def get_room(*, room_id: UUID) -> Room:
    try:
        return Room.objects.select_related('area', 'area__home').get(id=room_id)
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")


def list_rooms(*, area_id: Optional[UUID] = None, home_id: Optional[UUID] = None) -> QuerySet:
    queryset = Room.objects.select_related('area', 'area__home').exclude(deleted('area__home'))
    if area_id:
        queryset = queryset.filter(area_id=area_id)
    if home_id:
        queryset = queryset.filter(area__home_id=home_id)
    return queryset


@transaction.atomic
def update_room(*, room_id: UUID, data: dict) -> Room:
    try:
        room = Room.objects.select_for_update().get(id=room_id)
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    _apply(room, data, ROOM_FIELDS)
    room.save()
    return room


def delete_room(*, room_id: UUID) -> None:
    """Delete a room; purchases and line items pointing at it lose the link."""
    removed, _ = Room.objects.filter(id=room_id).delete()
    if not removed:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")
    logger.info('Room %s deleted', room_id)
