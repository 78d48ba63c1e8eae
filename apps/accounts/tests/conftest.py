import pytest

from apps.accounts.models import AppUser, Role
from apps.accounts.services import ExternalIdentity


@pytest.fixture
def pending_user(db):
    """Create a user who was invited but never signed in."""
    return AppUser.objects.create(
        auth_subject_id='pending_1700000000000_abc123',
        email='invitee@example.com',
        name='',
        role=Role.EDITOR,
    )


@pytest.fixture
def invitee_identity():
    """Identity the invitee presents on first sign-in."""
    return ExternalIdentity(
        session_present=True,
        subject_id='idp|invitee',
        email='Invitee@Example.com',
        name='Invited Person',
    )
