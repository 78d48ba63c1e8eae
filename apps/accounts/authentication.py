"""
DRF authentication backed by the external identity provider.

The provider issues signed JWTs; this class only verifies them (signature,
expiry, audience and issuer per ``SIMPLE_JWT``) and hands the claims to the
access control gate.
"""

from django.contrib.auth.models import AnonymousUser
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import UntypedToken

from apps.accounts.services import ExternalIdentity, resolve_caller

KEYWORD = 'Bearer'


def identity_from_claims(claims) -> ExternalIdentity:
    subject_id = claims.get('sub')
    if not subject_id:
        raise AuthenticationFailed('Token has no subject.')
    return ExternalIdentity(
        session_present=True,
        subject_id=str(subject_id),
        email=claims.get('email') or '',
        name=claims.get('name') or '',
    )


class ExternalIdentityAuthentication(BaseAuthentication):
    """
    Authenticate ``Authorization: Bearer <token>`` requests.

    Returns ``(AppUser, ExternalIdentity)``. A verified identity with no
    matching AppUser yields ``(AnonymousUser, ExternalIdentity)`` so the
    bootstrap endpoint can still see who is calling.
    """

    def authenticate(self, request):
        header = get_authorization_header(request).split()
        if not header or header[0].lower() != KEYWORD.lower().encode():
            return None

        if len(header) != 2:
            raise AuthenticationFailed('Invalid authorization header.')

        try:
            raw_token = header[1].decode()
        except UnicodeError:
            raise AuthenticationFailed('Invalid authorization header.')

        try:
            token = UntypedToken(raw_token)
        except TokenError as e:
            raise AuthenticationFailed(str(e))

        identity = identity_from_claims(token.payload)
        user = resolve_caller(identity)
        if user is None:
            return (AnonymousUser(), identity)
        return (user, identity)

    def authenticate_header(self, request):
        return f'{KEYWORD} realm="api"'
