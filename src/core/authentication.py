"""DRF authenticator that surfaces the identity resolved by ``JWTAuthMiddleware``.

The middleware has already verified the bearer token; DRF only needs to see
the resulting user and the decoded claims (exposed as ``request.auth``).
"""

from typing import Any, Optional, Tuple

from rest_framework.authentication import BaseAuthentication


class MiddlewareUserAuthentication(BaseAuthentication):
    """Return ``(user, token_payload)`` for requests the middleware authenticated."""

    def authenticate(self, request) -> Optional[Tuple[Any, Optional[dict]]]:
        django_request = getattr(request, "_request", None)
        if django_request is None:
            return None

        user = getattr(django_request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return None

        return user, getattr(django_request, "token_payload", None)

    def authenticate_header(self, request) -> str:
        # Lets DRF answer 401 rather than 403 for anonymous callers.
        return 'Bearer realm="api"'


__all__ = ["MiddlewareUserAuthentication"]
