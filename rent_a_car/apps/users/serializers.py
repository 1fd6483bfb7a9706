"""
Serializers for identities returned by the login providers.
"""

from rest_framework import serializers


class AuthLoginResponseSerializer(serializers.Serializer):
    """Body of a successful POST {AUTH_BASE}/auth/login."""
    id = serializers.CharField()
    username = serializers.CharField(required=False, allow_blank=True, default='')
    email = serializers.CharField(required=False, allow_blank=True, default='')
    firstName = serializers.CharField(required=False, allow_blank=True, default='')
    lastName = serializers.CharField(required=False, allow_blank=True, default='')
    accessToken = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class UserRecordSerializer(serializers.Serializer):
    """A user as stored by the mock CRUD API."""
    id = serializers.CharField()
    email = serializers.CharField(required=False, allow_blank=True, default='')
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    username = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True)
