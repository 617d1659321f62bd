from django.db import transaction
from rest_framework import serializers

from catalog.models import Account, Game, Skin


class GameSerializer(serializers.ModelSerializer):
    class Meta:
        model = Game
        fields = ['id', 'slug', 'name', 'verification', 'default_image_url', 'display_order']


class SkinSerializer(serializers.ModelSerializer):
    class Meta:
        model = Skin
        fields = ['id', 'name', 'rarity']
        read_only_fields = ['id']

    def to_internal_value(self, data):
        # Accept "Rare", "RARE", ... and store the canonical tag
        if isinstance(data, dict) and isinstance(data.get('rarity'), str):
            data = {**data, 'rarity': data['rarity'].strip().lower()}
        return super().to_internal_value(data)


class AccountSerializer(serializers.ModelSerializer):
    """
    Account with its ordered skins. Writing ``skins`` replaces the whole
    list.
    """
    game = serializers.SlugRelatedField(slug_field='slug', queryset=Game.objects.all())
    skins = SkinSerializer(many=True, required=False)
    highest_rarity = serializers.CharField(read_only=True)

    class Meta:
        model = Account
        fields = ['id', 'title', 'game', 'price', 'bundle', 'image_url', 'featured',
                  'skins', 'highest_rarity', 'created_at']
        read_only_fields = ['id', 'created_at']

    @transaction.atomic
    def create(self, validated_data):
        skins = validated_data.pop('skins', [])
        account = Account.objects.create(**validated_data)
        self._write_skins(account, skins)
        return account

    @transaction.atomic
    def update(self, instance, validated_data):
        skins = validated_data.pop('skins', None)
        instance = super().update(instance, validated_data)
        if skins is not None:
            instance.skins.all().delete()
            self._write_skins(instance, skins)
        return instance

    def _write_skins(self, account, skins):
        for position, skin in enumerate(skins):
            Skin.objects.create(account=account, position=position, **skin)
