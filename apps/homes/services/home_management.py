"""
Home management service.

Handles home CRUD (soft delete) and the home image gallery.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Count, Max, Q, QuerySet

from apps.homes.models import Home, HomeImage

from .exceptions import HomeImageNotFoundError, HomeNotFoundError

logger = logging.getLogger(__name__)

HOME_FIELDS = (
    'name',
    'name_lt',
    'address',
    'purchase_date',
    'cover_image_url',
    'description',
    'description_lt',
)


def create_home(*, name: str, **fields) -> Home:
    """
    Create a new home.

    Args:
        name: Display name
        **fields: Any other field from HOME_FIELDS

    Returns:
        Created Home instance
    """
    home = Home.objects.create(
        name=name,
        **{key: value for key, value in fields.items() if key in HOME_FIELDS}
    )
    logger.info('Home %s created', home.id)
    return home


def get_home(*, home_id: UUID) -> Home:
    """
    Get a live home by ID.

    Raises:
        HomeNotFoundError: If the home doesn't exist or is soft-deleted
    """
    try:
        return Home.objects.alive().get(id=home_id)
    except Home.DoesNotExist:
        raise HomeNotFoundError(f"Home with ID {home_id} not found")


def list_homes(*, search: Optional[str] = None) -> QuerySet:
    """List live homes with their area count."""
    queryset = Home.objects.alive().annotate(area_count=Count('areas', distinct=True))
    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(name_lt__icontains=search) |
            Q(address__icontains=search)
        )
    return queryset


@transaction.atomic
def update_home(*, home_id: UUID, data: dict) -> Home:
    """
    Update home fields in place.

    Uses select_for_update to prevent concurrent modifications.

    Raises:
        HomeNotFoundError: If the home doesn't exist or is soft-deleted
    """
    try:
        home = Home.objects.alive().select_for_update().get(id=home_id)
    except Home.DoesNotExist:
        raise HomeNotFoundError(f"Home with ID {home_id} not found")

    for key, value in data.items():
        if key in HOME_FIELDS:
            setattr(home, key, value)
    home.save()
    return home


@transaction.atomic
def soft_delete_home(*, home_id: UUID) -> None:
    """Flag a home as deleted; areas and purchases keep their reference."""
    home = get_home(home_id=home_id)
    home.soft_delete()
    logger.info('Home %s soft-deleted', home_id)


# =============================================================================
# Images
# =============================================================================

def list_home_images(*, home_id: UUID) -> QuerySet:
    home = get_home(home_id=home_id)
    return home.images.all()


@transaction.atomic
def add_home_image(
    *,
    home_id: UUID,
    url: str,
    caption: str = '',
    sort_order: Optional[int] = None,
) -> HomeImage:
    """
    Append an image to a home's gallery.

    When sort_order is not given the image goes last.
    """
    home = get_home(home_id=home_id)

    if sort_order is None:
        current_max = home.images.aggregate(m=Max('sort_order'))['m']
        sort_order = 0 if current_max is None else current_max + 1

    return HomeImage.objects.create(
        home=home,
        url=url,
        caption=caption,
        sort_order=sort_order,
    )


def delete_home_image(*, home_id: UUID, image_id: UUID) -> None:
    deleted, _ = HomeImage.objects.filter(id=image_id, home_id=home_id).delete()
    if not deleted:
        raise HomeImageNotFoundError(f"Image {image_id} not found for home {home_id}")
