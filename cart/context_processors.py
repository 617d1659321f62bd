from decimal import Decimal

from .services import Cart


def cart_summary(request):
    """Cart badge numbers for the header; zero for anonymous visitors."""
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return {'cart_total_items': 0, 'cart_total_price': Decimal("0.00")}
    cart = Cart(user)
    return {'cart_total_items': cart.total_items, 'cart_total_price': cart.total_price}
