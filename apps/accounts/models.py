from django.db import models

from apps.common.models import TimeStampedModel

# Placeholder subject ids start with this until the invitee first signs in.
PENDING_SUBJECT_PREFIX = 'pending_'


class Role(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    EDITOR = 'editor', 'Editor'
    VIEWER = 'viewer', 'Viewer'


EDITOR_ROLES = (Role.ADMIN, Role.EDITOR)


class AppUser(TimeStampedModel):
    """
    Application user linked to an external identity.

    Credentials live with the identity provider; this row only stores the
    provider's subject id, the role and the active flag.
    """

    auth_subject_id = models.CharField(max_length=255, unique=True)
    email = models.EmailField(unique=True, max_length=255)
    name = models.CharField(max_length=255, blank=True)

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.VIEWER)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'app_users'
        ordering = ['email']
        indexes = [
            models.Index(fields=['role'], name='app_users_role_idx'),
        ]

    def __str__(self):
        return self.email

    # DRF treats request.user as authenticated when this is truthy
    @property
    def is_authenticated(self):
        return True

    @property
    def is_anonymous(self):
        return False

    @property
    def is_pending(self):
        return self.auth_subject_id.startswith(PENDING_SUBJECT_PREFIX)

    @property
    def can_edit(self):
        return self.role in EDITOR_ROLES

    @property
    def is_admin(self):
        return self.role == Role.ADMIN
