from django.contrib.auth.models import User
from rest_framework import serializers

from users.models import ROLE_CHOICES
from users.permissions import get_role


class UserProfileSerializer(serializers.ModelSerializer):
    """
    Serializer for viewing and updating the signed-in user's profile.
    """
    display_name = serializers.CharField(source='profile.display_name', required=False, allow_blank=True)
    role = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'display_name', 'role', 'date_joined']
        read_only_fields = ['id', 'username', 'email', 'date_joined']

    def get_role(self, obj):
        return get_role(obj)

    def update(self, instance, validated_data):
        profile_data = validated_data.pop('profile', {})
        if 'display_name' in profile_data:
            instance.profile.display_name = profile_data['display_name']
            instance.profile.save(update_fields=['display_name'])
        return super().update(instance, validated_data)


class UserRoleSerializer(serializers.ModelSerializer):
    """One row per user; ``role`` is written through ``set_user_role``."""
    role = serializers.ChoiceField(choices=ROLE_CHOICES, write_only=True)
    current_role = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'role', 'current_role']
        read_only_fields = ['id', 'username', 'email']

    def get_current_role(self, obj):
        return get_role(obj)
