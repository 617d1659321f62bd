from rest_framework import serializers

from cart.models import CartItem
from cart.services import MAX_QUANTITY
from catalog.models import Account


class CartItemSerializer(serializers.ModelSerializer):
    account = serializers.PrimaryKeyRelatedField(queryset=Account.objects.all())
    title = serializers.CharField(source='account.title', read_only=True)
    game = serializers.CharField(source='account.game.slug', read_only=True)
    price = serializers.DecimalField(source='account.price', max_digits=10, decimal_places=2, read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = ['id', 'account', 'title', 'game', 'price', 'quantity', 'line_total']
        read_only_fields = ['id', 'quantity']


class QuantitySerializer(serializers.Serializer):
    # 0 removes the line
    quantity = serializers.IntegerField(min_value=0, max_value=MAX_QUANTITY)
