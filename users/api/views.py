from django.contrib.auth.models import User
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from users.models import ROLE_ADMIN
from users.permissions import HasRole
from users.utils import set_user_role

from .serializers import UserProfileSerializer, UserRoleSerializer


class UserRoleViewSet(mixins.ListModelMixin,
                      mixins.RetrieveModelMixin,
                      mixins.UpdateModelMixin,
                      viewsets.GenericViewSet):
    """
    Admin-only endpoint listing users with their role. ``PUT``/``PATCH``
    with ``{"role": ...}`` replaces the user's role.
    """
    serializer_class = UserRoleSerializer
    permission_classes = [HasRole]
    allowed_roles = (ROLE_ADMIN,)
    queryset = User.objects.select_related('role').order_by('id')

    def update(self, request, *args, **kwargs):
        user = self.get_object()
        serializer = self.get_serializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        if 'role' not in serializer.validated_data:
            return Response({'role': ['This field is required.']}, status=status.HTTP_400_BAD_REQUEST)
        set_user_role(user, serializer.validated_data['role'], actor=request.user)
        return Response(self.get_serializer(User.objects.get(pk=user.pk)).data)


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([permissions.IsAuthenticated])
def user_profile(request):
    """
    Retrieve or update the authenticated user's profile information.

    GET: Returns user profile information and role
    PUT/PATCH: Updates the display name
    """
    user = request.user

    if request.method == 'GET':
        serializer = UserProfileSerializer(user)
        return Response(serializer.data)

    partial = request.method == 'PATCH'
    serializer = UserProfileSerializer(user, data=request.data, partial=partial)
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
