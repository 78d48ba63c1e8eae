"""
Shared fixtures: app users per role, API clients carrying identity
provider tokens, and the home/supplier rows most suites build on.
"""
from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from apps.accounts.models import AppUser, Role
from apps.homes.models import Area, Home, Room
from apps.suppliers.models import Supplier, SupplierType


def issue_identity_token(subject_id, email='', name=''):
    """Mint a token the way the identity provider would."""
    token = AccessToken()
    token['sub'] = subject_id
    token['email'] = email
    token['name'] = name
    return str(token)


def make_client(subject_id, email='', name=''):
    client = APIClient()
    client.credentials(
        HTTP_AUTHORIZATION=f'Bearer {issue_identity_token(subject_id, email, name)}'
    )
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return AppUser.objects.create(
        auth_subject_id='idp|admin',
        email='admin@example.com',
        name='Admin User',
        role=Role.ADMIN,
    )


@pytest.fixture
def editor_user(db):
    return AppUser.objects.create(
        auth_subject_id='idp|editor',
        email='editor@example.com',
        name='Editor User',
        role=Role.EDITOR,
    )


@pytest.fixture
def viewer_user(db):
    return AppUser.objects.create(
        auth_subject_id='idp|viewer',
        email='viewer@example.com',
        name='Viewer User',
        role=Role.VIEWER,
    )


@pytest.fixture
def inactive_user(db):
    return AppUser.objects.create(
        auth_subject_id='idp|inactive',
        email='inactive@example.com',
        name='Inactive Editor',
        role=Role.EDITOR,
        is_active=False,
    )


@pytest.fixture
def admin_client(admin_user):
    """Return API client authenticated as an admin."""
    return make_client(admin_user.auth_subject_id, admin_user.email, admin_user.name)


@pytest.fixture
def editor_client(editor_user):
    """Return API client authenticated as an editor."""
    return make_client(editor_user.auth_subject_id, editor_user.email, editor_user.name)


@pytest.fixture
def viewer_client(viewer_user):
    """Return API client authenticated as a viewer."""
    return make_client(viewer_user.auth_subject_id, viewer_user.email, viewer_user.name)


@pytest.fixture
def inactive_client(inactive_user):
    return make_client(inactive_user.auth_subject_id, inactive_user.email)


@pytest.fixture
def identity_client():
    """Return a factory building clients for arbitrary identities."""
    return make_client


# =============================================================================
# Domain fixtures shared by homes, purchases and analytics tests
# =============================================================================

@pytest.fixture
def home(db):
    """Create a home."""
    return Home.objects.create(name='Lake House', address='1 Shore Rd')


@pytest.fixture
def other_home(db):
    return Home.objects.create(name='City Flat')


@pytest.fixture
def kitchen(home):
    """Kitchen area with a budget of 5000."""
    return Area.objects.create(home=home, name='Kitchen', budget=Decimal('5000.00'))


@pytest.fixture
def sink(kitchen):
    return Room.objects.create(area=kitchen, name='Sink')


@pytest.fixture
def counter(kitchen):
    return Room.objects.create(area=kitchen, name='Counter')


@pytest.fixture
def company_supplier(db):
    return Supplier.objects.create(
        type=SupplierType.COMPANY,
        company_name='Baltic Tiles UAB',
        email='sales@baltictiles.example',
        rating=4,
    )


@pytest.fixture
def individual_supplier(db):
    return Supplier.objects.create(
        type=SupplierType.INDIVIDUAL,
        first_name='Jonas',
        last_name='Petraitis',
        phone='+37060000000',
    )
