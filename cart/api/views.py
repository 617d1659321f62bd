from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from cart.models import CartItem
from cart.services import Cart, EmptyCart

from .serializers import CartItemSerializer, QuantitySerializer


class CartItemViewSet(viewsets.ModelViewSet):
    """
    The current user's cart. ``POST`` with ``{"account": id}`` adds one unit
    (incrementing an existing line); ``PATCH`` with ``{"quantity": n}``
    changes a line, ``0`` removes it. ``GET /summary/`` returns the totals
    and ``POST /checkout/`` places the order.
    """
    serializer_class = CartItemSerializer
    permission_classes = [permissions.IsAuthenticated]
    http_method_names = ['get', 'post', 'patch', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        return CartItem.objects.filter(user=self.request.user).select_related('account', 'account__game')

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = Cart(request.user).add(serializer.validated_data['account'])
        return Response(self.get_serializer(item).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        item = self.get_object()
        serializer = QuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        updated = Cart(request.user).update_quantity(item.pk, serializer.validated_data['quantity'])
        if updated is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(self.get_serializer(updated).data)

    def destroy(self, request, *args, **kwargs):
        item = self.get_object()
        Cart(request.user).remove(item.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def summary(self, request):
        cart = Cart(request.user)
        return Response({'total_items': cart.total_items, 'total_price': str(cart.total_price)})

    @action(detail=False, methods=['post'])
    def checkout(self, request):
        try:
            order = Cart(request.user).checkout()
        except EmptyCart as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(
            {'order': order.pk, 'total': str(order.total), 'status': order.status},
            status=status.HTTP_201_CREATED,
        )
