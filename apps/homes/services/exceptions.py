"""
Domain-specific exceptions for homes app.

These exceptions represent business rule violations; each maps to an
HTTP status through the shared error taxonomy.
"""

from apps.common.exceptions import Conflict, NotFound


class HomesServiceError(Exception):
    """Base exception for all homes service errors."""
    pass


class HomeNotFoundError(HomesServiceError, NotFound):
    """Raised when a home does not exist or is soft-deleted."""
    default_detail = 'Home not found.'


class HomeImageNotFoundError(HomesServiceError, NotFound):
    """Raised when an image does not belong to the home."""
    default_detail = 'Image not found.'


class AreaNotFoundError(HomesServiceError, NotFound):
    """Raised when an area does not exist."""
    default_detail = 'Area not found.'


class RoomNotFoundError(HomesServiceError, NotFound):
    """Raised when a room does not exist."""
    default_detail = 'Room not found.'


class AreaHasRoomsError(HomesServiceError, Conflict):
    """Raised when deleting an area that still has rooms."""
    default_detail = 'Cannot delete area with rooms. Delete or reassign the rooms first.'

