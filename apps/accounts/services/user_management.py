"""
Admin user management service.

Handles listing, updating and deleting AppUsers with guards that stop an
admin from locking themselves out.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import AppUser, Role

from .exceptions import SelfModificationError, UserNotFoundError

logger = logging.getLogger(__name__)


def list_users() -> QuerySet:
    return AppUser.objects.order_by('-created_at')


def get_user(*, user_id: UUID) -> AppUser:
    try:
        return AppUser.objects.get(id=user_id)
    except AppUser.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")


@transaction.atomic
def update_user(
    *,
    user_id: UUID,
    updated_by: AppUser,
    name: Optional[str] = None,
    role: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> AppUser:
    """
    Update name, role or active flag of a user.

    Raises:
        UserNotFoundError: If the user doesn't exist
        SelfModificationError: If an admin demotes or deactivates themselves
    """
    try:
        user = AppUser.objects.select_for_update().get(id=user_id)
    except AppUser.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    if user.id == updated_by.id:
        if role is not None and role != Role.ADMIN:
            raise SelfModificationError(
                errors={'role': ['Cannot remove your own admin role.']},
                detail='Cannot remove your own admin role',
            )
        if is_active is False:
            raise SelfModificationError(
                errors={'is_active': ['Cannot deactivate your own account.']},
                detail='Cannot deactivate your own account',
            )

    if name is not None:
        user.name = name
    if role is not None:
        user.role = role
    if is_active is not None:
        user.is_active = is_active
    user.save()

    logger.info('User %s updated by %s', user.email, updated_by.email)
    return user


@transaction.atomic
def delete_user(*, user_id: UUID, deleted_by: AppUser) -> None:
    """
    Permanently remove a user.

    Raises:
        UserNotFoundError: If the user doesn't exist
        SelfModificationError: If the admin targets their own account
    """
    if str(user_id) == str(deleted_by.id):
        raise SelfModificationError(
            errors={'id': ['Cannot delete your own account.']},
            detail='Cannot delete your own account',
        )

    deleted, _ = AppUser.objects.filter(id=user_id).delete()
    if not deleted:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    logger.info('User %s deleted by %s', user_id, deleted_by.email)
