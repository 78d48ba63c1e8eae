"""
Access control gate.

Resolves the caller's external identity to an AppUser and enforces the
active flag and role before any mutating or sensitive operation runs.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from django.db import transaction

from apps.accounts.models import AppUser, EDITOR_ROLES, Role
from apps.common.exceptions import Unauthenticated

from .exceptions import InactiveAccountError, InsufficientRoleError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalIdentity:
    """What the identity provider tells us about the caller."""
    session_present: bool
    subject_id: str
    email: str = ''
    name: str = ''


def resolve_caller(identity: Optional[ExternalIdentity]) -> Optional[AppUser]:
    """
    Resolve an external identity to an AppUser.

    Looks up by subject id first, then by email. An email match that still
    carries a pending placeholder is rebound to the real subject id; after
    that the subject-id lookup hits and nothing is written again.

    Returns:
        AppUser, or None when the identity is valid but unknown here

    Raises:
        Unauthenticated: If there is no session or identity at all
    """
    if identity is None or not identity.session_present or not identity.subject_id:
        raise Unauthenticated()

    user = AppUser.objects.filter(auth_subject_id=identity.subject_id).first()
    if user is not None:
        return user

    if not identity.email:
        return None

    return _rebind_pending_user(identity)


@transaction.atomic
def _rebind_pending_user(identity: ExternalIdentity) -> Optional[AppUser]:
    user = (
        AppUser.objects
        .select_for_update()
        .filter(email__iexact=identity.email)
        .first()
    )
    if user is None:
        return None

    if user.auth_subject_id == identity.subject_id:
        return user

    if not user.is_pending:
        # Email already linked to a different identity
        logger.warning(
            'Identity %s presented email %s which is linked to another subject',
            identity.subject_id, identity.email,
        )
        return None

    user.auth_subject_id = identity.subject_id
    update_fields = ['auth_subject_id', 'updated_at']
    if identity.name and not user.name:
        user.name = identity.name
        update_fields.append('name')
    user.save(update_fields=update_fields)

    logger.info('Linked invited user %s to identity %s', user.email, identity.subject_id)
    return user


def require_active(user: AppUser) -> AppUser:
    """Raise InactiveAccountError unless the user is active."""
    if not user.is_active:
        raise InactiveAccountError()
    return user


def require_role(user: AppUser, allowed_roles: Iterable[str]) -> AppUser:
    """Raise InsufficientRoleError unless the user's role is allowed."""
    allowed = tuple(allowed_roles)
    if user.role not in allowed:
        raise InsufficientRoleError(
            f"Role '{user.role}' is not allowed; requires one of: {', '.join(allowed)}"
        )
    return user


def can_edit(role: str) -> bool:
    return role in EDITOR_ROLES


def is_admin(role: str) -> bool:
    return role == Role.ADMIN
