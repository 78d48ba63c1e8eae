"""
First-admin bootstrap and user invitations.
"""

import logging
import secrets
import time

from django.db import IntegrityError, connection, transaction

from apps.accounts.models import AppUser, PENDING_SUBJECT_PREFIX, Role

from .access_control import ExternalIdentity, require_role
from .exceptions import BootstrapNotAllowedError, DuplicateEmailError

logger = logging.getLogger(__name__)


def generate_pending_subject_id() -> str:
    """Placeholder subject id: ``pending_<epoch-ms>_<random>``."""
    return f'{PENDING_SUBJECT_PREFIX}{int(time.time() * 1000)}_{secrets.token_hex(6)}'


def _lock_user_table() -> None:
    """Hold off concurrent bootstraps until this transaction ends."""
    # SQLite already serializes writers
    if connection.vendor == 'postgresql':
        with connection.cursor() as cursor:
            cursor.execute(f'LOCK TABLE {AppUser._meta.db_table} IN EXCLUSIVE MODE')


@transaction.atomic
def bootstrap_first_admin(*, identity: ExternalIdentity) -> AppUser:
    """
    Create the first admin from the caller's identity.

    Allowed exactly once, while the user table is empty.
    The table is locked before the emptiness check so two first callers
    cannot both become admin.

    Raises:
        BootstrapNotAllowedError: If any AppUser already exists
    """
    _lock_user_table()
    if AppUser.objects.exists():
        logger.warning('Bootstrap attempt by %s rejected: users already exist', identity.subject_id)
        raise BootstrapNotAllowedError(
            'Bootstrap not allowed - users already exist in the system'
        )

    user = AppUser.objects.create(
        auth_subject_id=identity.subject_id,
        email=(identity.email or '').lower(),
        name=identity.name or '',
        role=Role.ADMIN,
        is_active=True,
    )
    logger.info('Bootstrapped first admin %s', user.email)
    return user


def invite_user(
    *,
    email: str,
    role: str = Role.VIEWER,
    name: str = '',
    invited_by: AppUser,
) -> AppUser:
    """
    Create a pending user that is linked on first sign-in.

    Args:
        email: Invitee email (matched case-insensitively at sign-in)
        role: Role to grant
        name: Optional display name
        invited_by: Admin performing the invite

    Raises:
        InsufficientRoleError: If invited_by is not an admin
        DuplicateEmailError: If the email already has an account
    """
    require_role(invited_by, [Role.ADMIN])

    email = email.strip().lower()
    if AppUser.objects.filter(email__iexact=email).exists():
        raise DuplicateEmailError()

    try:
        with transaction.atomic():
            user = AppUser.objects.create(
                auth_subject_id=generate_pending_subject_id(),
                email=email,
                name=name,
                role=role,
                is_active=True,
            )
    except IntegrityError:
        # Lost a race with a concurrent invite for the same email
        raise DuplicateEmailError()

    logger.info('User %s invited as %s by %s', email, role, invited_by.email)
    return user
