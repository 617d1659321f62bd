from rest_framework import viewsets
from rest_framework.response import Response

from catalog.filters import DEFAULT_SORT, filter_accounts, parse_min_skins
from catalog.models import Game, accounts_with_skins
from users.permissions import IsAdminRoleOrReadOnly

from .serializers import AccountSerializer, GameSerializer


class AccountViewSet(viewsets.ModelViewSet):
    """
    Listed accounts. ``list`` accepts the storefront filters as query
    parameters: ``game``, ``q``, ``price``, ``skins`` and ``sort``.
    Anyone can read; only admins can write.
    """
    serializer_class = AccountSerializer
    permission_classes = [IsAdminRoleOrReadOnly]

    def get_queryset(self):
        return accounts_with_skins()

    def list(self, request, *args, **kwargs):
        params = request.query_params
        accounts = filter_accounts(
            self.get_queryset(),
            game=params.get('game'),
            query=params.get('q', ''),
            price_bucket=params.get('price', ''),
            min_skins=parse_min_skins(params.get('skins')),
            sort_by=params.get('sort', DEFAULT_SORT),
        )
        serializer = self.get_serializer(accounts, many=True)
        return Response(serializer.data)


class GameViewSet(viewsets.ModelViewSet):
    serializer_class = GameSerializer
    permission_classes = [IsAdminRoleOrReadOnly]
    queryset = Game.objects.all()
