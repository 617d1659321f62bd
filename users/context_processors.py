from .models import ROLE_ADMIN, ROLE_CHECKER
from .permissions import at_least, get_role


def role(request):
    """Exposes the current role and the navigation links it unlocks."""
    user = getattr(request, 'user', None)
    return {
        'user_role': get_role(user),
        'can_review': at_least(user, ROLE_CHECKER),
        'can_manage': at_least(user, ROLE_ADMIN),
    }
