"""
Accounts app services layer.

Identity resolution, role checks, bootstrap, invitations and admin user
management. State-changing operations run inside transactions.
"""

from .exceptions import (
    AccountsServiceError,
    UserNotFoundError,
    InactiveAccountError,
    InsufficientRoleError,
    BootstrapNotAllowedError,
    DuplicateEmailError,
    SelfModificationError,
)

from .access_control import (
    ExternalIdentity,
    resolve_caller,
    require_active,
    require_role,
    can_edit,
    is_admin,
)

from .invitations import (
    bootstrap_first_admin,
    invite_user,
    generate_pending_subject_id,
)

from .user_management import (
    list_users,
    get_user,
    update_user,
    delete_user,
)


__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserNotFoundError',
    'InactiveAccountError',
    'InsufficientRoleError',
    'BootstrapNotAllowedError',
    'DuplicateEmailError',
    'SelfModificationError',

    # Access control
    'ExternalIdentity',
    'resolve_caller',
    'require_active',
    'require_role',
    'can_edit',
    'is_admin',

    # Bootstrap & invitations
    'bootstrap_first_admin',
    'invite_user',
    'generate_pending_subject_id',

    # User management
    'list_users',
    'get_user',
    'update_user',
    'delete_user',
]
