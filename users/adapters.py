import logging

from allauth.account.utils import get_adapter
from allauth.socialaccount.adapter import DefaultSocialAccountAdapter
from django.contrib.auth import get_user_model

logger = logging.getLogger(__name__)


class CustomSocialAccountAdapter(DefaultSocialAccountAdapter):

    def pre_social_login(self, request, sociallogin):
        """
        Runs before allauth tries to create a user for a social login.
        When a local account already owns one of the provider's verified
        e-mails, the social account is linked to it instead.
        """
        if sociallogin.is_existing:
            return

        verified_emails = [
            address.email.lower()
            for address in sociallogin.email_addresses
            if address.verified
        ]
        if not verified_emails:
            return

        User = get_user_model()
        matches = list(User.objects.filter(email__in=verified_emails)[:2])
        if len(matches) != 1:
            # None: brand-new user, allauth signs them up (SOCIALACCOUNT_AUTO_SIGNUP).
            # Several: ambiguous, let allauth ask.
            return

        logger.info("Linking %s login to existing user %s", sociallogin.account.provider, matches[0].pk)
        sociallogin.connect(request, matches[0])

    def populate_user(self, request, sociallogin, data):
        """Builds a readable, unique username from the provider's given name."""
        user = super().populate_user(request, sociallogin, data)

        first_name = (data.get('given_name') or data.get('first_name') or '').strip().title()
        if first_name:
            user.username = get_adapter().generate_unique_username([
                first_name,
                user.email,
                'user'
            ])
        return user

    def save_user(self, request, sociallogin, form=None):
        user = super().save_user(request, sociallogin, form)
        display_name = sociallogin.account.extra_data.get('name') or user.first_name
        if display_name:
            user.profile.display_name = display_name
            user.profile.save(update_fields=['display_name'])
        return user
