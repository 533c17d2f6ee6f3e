"""Authentication endpoints: register, login, refresh, logout, profile and avatar."""

import logging
from typing import Any

from django.conf import settings
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response

from core.response import BaseAPIView, api_response
from core.storage import store_image
from .models import Profile
from .serializers import (
    AvatarUploadSerializer,
    LoginSerializer,
    ProfileSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserDetailSerializer,
)
from .services import TokenService

logger = logging.getLogger(__name__)

User = get_user_model()


class RegisterView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Register a new reader account and return its profile."""
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Registered user %s", user.id)
        return api_response(UserDetailSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Authenticate and issue access + refresh tokens."""
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        access, refresh = TokenService.generate_tokens(user)
        return api_response({"access": access, "refresh": refresh})


class RefreshView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Exchange a valid refresh token for new access/refresh tokens."""
        refresh_token = request.data.get("refresh")
        if not refresh_token:
            raise AuthenticationFailed("Refresh token required")

        payload = TokenService.decode_token(refresh_token, expected_type="refresh")
        if TokenService.is_token_blocked(payload.get("jti", "")):
            raise AuthenticationFailed("Invalid or revoked refresh token")

        user = _get_active_user(payload.get("sub"))
        if not user:
            raise AuthenticationFailed("User not found or inactive")

        # A logout-all since this token was minted bumps token_version.
        if payload.get("ver") != user.token_version:
            raise AuthenticationFailed("Invalid or revoked refresh token")

        # Refresh tokens are single use.
        TokenService.block_token(payload["jti"], payload["exp"])
        access, new_refresh = TokenService.generate_tokens(user)
        return api_response({"access": access, "refresh": new_refresh})


class LogoutView(BaseAPIView):
    """Invalidate the current access token by blocklisting its jti."""

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Blocklist the bearer access token and return 204 No Content."""
        payload = _require_token_payload(request)
        TokenService.block_token(payload["jti"], payload["exp"])
        return Response(status=status.HTTP_204_NO_CONTENT)


class LogoutAllView(BaseAPIView):
    """Invalidate all existing tokens for the current user across devices."""

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Increment token_version and blocklist the current access token."""
        payload = _require_token_payload(request)

        user = request.user
        user.token_version = (user.token_version or 1) + 1
        user.save(update_fields=["token_version"])
        TokenService.block_token(payload["jti"], payload["exp"])
        logger.info("Revoked all tokens for user %s", user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Return the current user's identity, role and profile."""
        _require_token_payload(request)
        return api_response(UserDetailSerializer(request.user).data)

    # noinspection PyMethodMayBeStatic
    def patch(self, request):
        """Create or update the current user's profile."""
        _require_token_payload(request)
        profile, _ = Profile.objects.get_or_create(user=request.user)
        serializer = ProfileUpdateSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return api_response(UserDetailSerializer(request.user).data)

    # noinspection PyMethodMayBeStatic
    def delete(self, request):
        """Soft-delete the current user and blocklist the current access token."""
        payload = _require_token_payload(request)
        TokenService.block_token(payload["jti"], payload["exp"])
        request.user.is_active = False
        request.user.save(update_fields=["is_active"])
        logger.info("Deactivated user %s", request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AvatarUploadView(BaseAPIView):
    """Upload an avatar image and store its URL on the caller's profile."""

    parser_classes = [MultiPartParser, FormParser]

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        _require_token_payload(request)
        serializer = AvatarUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        url = store_image(
            serializer.validated_data["file"],
            folder="avatars",
            owner=str(request.user.id),
            max_bytes=settings.AVATAR_MAX_BYTES,
        )
        profile, _ = Profile.objects.get_or_create(user=request.user)
        profile.avatar_url = url
        profile.save(update_fields=["avatar_url", "updated_at"])
        return api_response({"url": url}, status=status.HTTP_201_CREATED)


class AuthorProfileView(BaseAPIView):
    """Public author bio shown on article pages."""

    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def get(self, request, user_id):
        profile = get_object_or_404(Profile, user_id=user_id, user__is_active=True)
        return api_response(ProfileSerializer(profile).data)


def _get_active_user(user_id) -> User | None:
    """Retrieve an active user by id, or None if missing/inactive."""
    if not user_id:
        return None
    try:
        user = User.objects.get(id=user_id)
    except (User.DoesNotExist, ValueError):
        return None
    if not user.is_active:
        return None
    return user


def _require_token_payload(request) -> dict[str, Any]:
    """Return the verified access-token claims or fail with 401."""
    if not request.user.is_authenticated or not request.auth:
        raise AuthenticationFailed("Authentication required")
    return request.auth
