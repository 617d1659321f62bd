from django.core.exceptions import ValidationError
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from sales import services
from sales.models import SellRequest
from users.models import ROLE_ADMIN, ROLE_CHECKER
from users.permissions import HasRole, has_role

from .serializers import ReviewSerializer, SellRequestSerializer


class SellRequestViewSet(mixins.CreateModelMixin,
                         mixins.ListModelMixin,
                         mixins.RetrieveModelMixin,
                         mixins.DestroyModelMixin,
                         viewsets.GenericViewSet):
    """
    Sellers create, list and withdraw (``DELETE``) their own requests.
    Checkers and admins get the review queue with ``?status=pending`` and
    act on it with ``POST <id>/approve/`` and ``POST <id>/deny/``; a request
    somebody else already handled answers ``409``.
    """
    serializer_class = SellRequestSerializer
    permission_classes = [permissions.IsAuthenticated]
    allowed_roles = (ROLE_CHECKER, ROLE_ADMIN)
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        queryset = SellRequest.objects.select_related('game', 'verification')
        user = self.request.user
        if self.request.query_params.get('status') == SellRequest.STATUS_PENDING and has_role(user, *self.allowed_roles):
            return queryset.filter(status=SellRequest.STATUS_PENDING)
        return queryset.filter(user=user)

    def perform_create(self, serializer):
        serializer.instance = services.submit_sell_request(self.request.user, serializer.validated_data)

    def destroy(self, request, *args, **kwargs):
        sell_request = self.get_object()
        try:
            services.withdraw_request(sell_request.pk, request.user)
        except services.ReviewConflict as e:
            return Response({'detail': str(e)}, status=status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'], permission_classes=[HasRole])
    def approve(self, request, pk=None):
        serializer = ReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            account = services.approve_request(
                int(pk), request.user,
                reviewer_handle=serializer.validated_data.get('reviewer_discord_handle'),
            )
        except ValidationError as e:
            return Response({'detail': " ".join(e.messages)}, status=status.HTTP_400_BAD_REQUEST)
        except services.ReviewConflict as e:
            return Response({'detail': str(e)}, status=status.HTTP_409_CONFLICT)
        return Response({'status': SellRequest.STATUS_APPROVED, 'account': account.pk})

    @action(detail=True, methods=['post'], permission_classes=[HasRole])
    def deny(self, request, pk=None):
        try:
            services.deny_request(int(pk), request.user)
        except services.ReviewConflict as e:
            return Response({'detail': str(e)}, status=status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)
