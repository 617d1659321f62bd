from django import forms
from rest_framework import serializers

from catalog.models import VERIFICATION_CREDENTIALS, VERIFICATION_DISCORD, Game
from sales.forms import check_skin_count, split_skin_names
from sales.models import SellRequest


class SellRequestSerializer(serializers.ModelSerializer):
    """
    Sellers post the plain credentials; they are encrypted by the service
    layer and never echoed back.
    """
    game = serializers.SlugRelatedField(slug_field='slug', queryset=Game.objects.all())
    skin_names = serializers.ListField(child=serializers.CharField(allow_blank=True), allow_empty=False)
    game_password = serializers.CharField(write_only=True, max_length=200)
    verification_email = serializers.EmailField(write_only=True, required=False, allow_blank=True)
    verification_password = serializers.CharField(write_only=True, required=False, allow_blank=True)
    discord_handle = serializers.CharField(write_only=True, required=False, allow_blank=True)
    verification_method = serializers.SerializerMethodField()
    reviewer_discord_handle = serializers.SerializerMethodField()

    class Meta:
        model = SellRequest
        fields = [
            'id', 'title', 'game', 'price', 'amount_of_skins', 'skin_names', 'game_username',
            'game_password', 'verification_email', 'verification_password', 'discord_handle',
            'status', 'verification_method', 'reviewer_discord_handle', 'account', 'created_at',
        ]
        read_only_fields = ['id', 'status', 'account', 'created_at']

    def get_verification_method(self, obj):
        verification = obj.verification_or_none
        return verification.method if verification else None

    def get_reviewer_discord_handle(self, obj):
        verification = obj.verification_or_none
        return verification.reviewer_discord_handle if verification else ''

    def validate_skin_names(self, value):
        return split_skin_names(value)

    def validate(self, attrs):
        try:
            check_skin_count(attrs.get('amount_of_skins'), attrs.get('skin_names', []))
        except forms.ValidationError as e:
            raise serializers.ValidationError({'skin_names': e.messages})

        game = attrs['game']
        if game.verification == VERIFICATION_CREDENTIALS:
            if not attrs.get('verification_email') or not attrs.get('verification_password'):
                raise serializers.ValidationError(
                    {'verification_email': f"{game.name} requires the linked e-mail and its password."}
                )
        elif game.verification == VERIFICATION_DISCORD and not attrs.get('discord_handle'):
            raise serializers.ValidationError({'discord_handle': f"{game.name} requires your Discord handle."})
        return attrs


class ReviewSerializer(serializers.Serializer):
    reviewer_discord_handle = serializers.CharField(required=False, allow_blank=True, max_length=100)
