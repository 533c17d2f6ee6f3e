"""Serializers for authentication flows (register, login) and profiles."""

from typing import cast

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from access_control.resolver import resolve_role
from .managers import UserManager
from .models import Profile

User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    """Validate and create a reader account (no role row, so role ``user``)."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    repeat_password = serializers.CharField(write_only=True, min_length=8)
    display_name = serializers.CharField(required=False, allow_blank=True, max_length=150)

    @staticmethod
    def validate_email(value):
        """Ensure email is unique before creation."""
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already in use")
        return value

    def validate(self, attrs):
        """Ensure provided passwords match before creation."""
        if attrs.get("password") != attrs.get("repeat_password"):
            raise serializers.ValidationError("Passwords do not match")
        return attrs

    def create(self, validated_data):
        """Create the account together with an empty public profile."""
        validated_data.pop("repeat_password")
        display_name = validated_data.pop("display_name", "") or None
        manager = cast(UserManager, User.objects)
        with transaction.atomic():
            user = manager.create_user(**validated_data)
            Profile.objects.create(user=user, display_name=display_name)
        return user


class LoginSerializer(serializers.Serializer):
    """Authenticate a user via email/password using bcrypt verification."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        """Authenticate credentials and attach the user to validated_data."""
        email = attrs.get("email")
        password = attrs.get("password")
        try:
            user = User.objects.get(email__iexact=email)
        except User.DoesNotExist:
            raise AuthenticationFailed("Invalid credentials")

        if not user.is_active:
            raise AuthenticationFailed("User is inactive")

        if not UserManager.verify_password(user, password):
            raise AuthenticationFailed("Invalid credentials")

        attrs["user"] = user
        return attrs


class ProfileSerializer(serializers.ModelSerializer):
    """Public author profile."""

    user_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Profile
        fields = ["user_id", "display_name", "avatar_url", "bio", "created_at", "updated_at"]
        read_only_fields = ["user_id", "created_at", "updated_at"]


class UserDetailSerializer(serializers.ModelSerializer):
    """Current-user payload: identity, resolved role and profile."""

    role = serializers.SerializerMethodField()
    profile = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "email", "role", "profile", "date_joined"]
        read_only_fields = fields

    @staticmethod
    def get_role(obj) -> str:
        return resolve_role(obj.id).value

    @staticmethod
    def get_profile(obj):
        profile = Profile.objects.filter(user=obj).first()
        if profile is None:
            return None
        return ProfileSerializer(profile).data


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Patchable fields for /auth/me updates."""

    class Meta:
        model = Profile
        fields = ["display_name", "avatar_url", "bio"]
        extra_kwargs = {
            field: {"required": False, "allow_blank": True, "allow_null": True} for field in fields
        }

    def validate(self, attrs):
        """Reject attempts to change the account email through the profile."""
        if "email" in getattr(self, "initial_data", {}):
            raise serializers.ValidationError("Email cannot be updated via this endpoint")
        return super().validate(attrs)


class AvatarUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
