import pytest
from django.contrib.auth.models import User
from django.core.management import call_command

from catalog.models import Game
from users.models import ROLE_ADMIN, ROLE_CHECKER, UserRole


@pytest.fixture
def seeded(db):
    """Default games plus the sample accounts."""
    call_command('seed_catalog', verbosity=0)


@pytest.fixture
def make_user(db):
    def _make_user(username, role=None, **extra):
        user = User.objects.create_user(username=username, password="s3cret-pass", email=f"{username}@example.com", **extra)
        if role:
            UserRole.objects.create(user=user, role=role)
        return User.objects.get(pk=user.pk)
    return _make_user


@pytest.fixture
def buyer(make_user):
    return make_user("buyer")


@pytest.fixture
def checker(make_user):
    return make_user("checker", role=ROLE_CHECKER)


@pytest.fixture
def store_admin(make_user):
    return make_user("store_admin", role=ROLE_ADMIN)


@pytest.fixture
def buyer_client(client, buyer):
    client.force_login(buyer)
    return client


@pytest.fixture
def checker_client(client, checker):
    client.force_login(checker)
    return client


@pytest.fixture
def admin_client_role(client, store_admin):
    client.force_login(store_admin)
    return client


@pytest.fixture
def valorant(seeded):
    return Game.objects.get(slug='valorant')


@pytest.fixture
def minecraft(seeded):
    return Game.objects.get(slug='minecraft')


@pytest.fixture
def csgo(seeded):
    return Game.objects.get(slug='csgo')
