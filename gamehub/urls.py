"""
URL configuration for the GameHub storefront.
"""
from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.urls import include, path
from rest_framework import routers

from cart import views as cart_views
from cart.api.views import CartItemViewSet
from catalog import views as catalog_views
from catalog.api.views import AccountViewSet, GameViewSet
from sales import views as sales_views
from sales.api.views import SellRequestViewSet
from users import views as user_views
from users.api.views import UserRoleViewSet, user_profile


def global_settings_context(request):
    """Exposes the PAYMENT switch to every template."""
    return {'PAYMENT_ENABLED': settings.PAYMENT}


router = routers.DefaultRouter()
router.register(r"accounts", AccountViewSet, basename="api-account")
router.register(r"games", GameViewSet, basename="api-game")
router.register(r"cart", CartItemViewSet, basename="api-cart")
router.register(r"sell-requests", SellRequestViewSet, basename="api-sell-request")
router.register(r"roles", UserRoleViewSet, basename="api-role")

urlpatterns = [
    path("admin/", admin.site.urls),
    path("accounts/", include("allauth.urls")),

    path("api/me/", user_profile, name="api_me"),
    path("api/", include(router.urls)),

    # Browse
    path("", catalog_views.index, name="home"),

    # Cart & checkout
    path("cart/", cart_views.cart_detail, name="cart_detail"),
    path("cart/add/<int:account_id>/", cart_views.add_to_cart, name="add_to_cart"),
    path("cart/update/<int:item_id>/", cart_views.update_cart_item, name="update_cart_item"),
    path("cart/remove/<int:item_id>/", cart_views.remove_cart_item, name="remove_cart_item"),
    path("checkout/", cart_views.checkout, name="checkout"),
    path("orders/<int:order_id>/", cart_views.order_detail, name="order_detail"),
    path("payment-success/", cart_views.payment_success, name="payment_success"),
    path("payment-failure/", cart_views.payment_failure, name="payment_failure"),
    path("payment-pending/", cart_views.payment_pending, name="payment_pending"),
    path("mp-webhook/", cart_views.mp_webhook, name="mp_webhook"),

    # Sell requests
    path("sell/", sales_views.sell, name="sell"),
    path("sell/mine/", sales_views.my_requests, name="my_requests"),
    path("sell/<int:request_id>/withdraw/", sales_views.withdraw_request, name="withdraw_request"),
    path("sell/notices/", sales_views.notices, name="sell_notices"),
    path("sell/notices/<int:request_id>/dismiss/", sales_views.dismiss_notice, name="dismiss_notice"),

    # Review
    path("checker/", sales_views.checker_dashboard, name="checker_dashboard"),
    path("checker/<int:request_id>/approve/", sales_views.approve_request, name="approve_request"),
    path("checker/<int:request_id>/deny/", sales_views.deny_request, name="deny_request"),
    path("checker/<int:request_id>/reveal/", sales_views.reveal_credentials, name="reveal_credentials"),

    # Admin management
    path("manage/accounts/", catalog_views.manage_accounts, name="manage_accounts"),
    path("manage/accounts/new/", catalog_views.edit_account, name="create_account"),
    path("manage/accounts/export/", catalog_views.export_accounts, name="export_accounts"),
    path("manage/accounts/<int:account_id>/", catalog_views.edit_account, name="edit_account"),
    path("manage/accounts/<int:account_id>/delete/", catalog_views.delete_account, name="delete_account"),
    path("manage/accounts/<int:account_id>/feature/", catalog_views.toggle_featured, name="toggle_featured"),
    path("manage/games/", catalog_views.manage_games, name="manage_games"),
    path("manage/games/<int:game_id>/delete/", catalog_views.delete_game, name="delete_game"),
    path("manage/users/", user_views.manage_users, name="manage_users"),
]
