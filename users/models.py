"""
Data models for the `users` app.

``Profile`` holds per-user display settings and is created automatically
for every new user. ``UserRole`` grants the elevated ``checker`` and
``admin`` roles; a user without a row is a plain ``user``. ``ActivityLog``
is the append-only audit trail written by review, reveal and management
actions.
"""
from __future__ import annotations

from django.contrib.auth.models import User
from django.db import models
from django.db.models.signals import post_save
from django.dispatch import receiver

ROLE_USER = 'user'
ROLE_CHECKER = 'checker'
ROLE_ADMIN = 'admin'

ROLE_CHOICES: list[tuple[str, str]] = [
    (ROLE_USER, 'User'),
    (ROLE_CHECKER, 'Checker'),
    (ROLE_ADMIN, 'Admin'),
]

# Navigation privilege: user < checker < admin
ROLE_LEVELS: dict[str, int] = {ROLE_USER: 0, ROLE_CHECKER: 1, ROLE_ADMIN: 2}


class Profile(models.Model):
    """Represents user profile settings."""
    user = models.OneToOneField(User, on_delete=models.CASCADE)
    display_name = models.CharField(max_length=150, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.display_name or self.user.username

    @property
    def label(self) -> str:
        return self.display_name or self.user.email or self.user.username


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    if created:
        Profile.objects.create(user=instance)


@receiver(post_save, sender=User)
def save_user_profile(sender, instance, **kwargs):
    Profile.objects.get_or_create(user=instance)


class UserRole(models.Model):
    """Elevated role of a user. At most one per user; absence means ``user``."""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="role")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.user.username} - {self.role}"


class ActivityLog(models.Model):
    timestamp = models.DateTimeField(auto_now_add=True)
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name="activity")
    action = models.CharField(max_length=100)
    details = models.TextField(blank=True)

    class Meta:
        ordering = ['-timestamp']
        verbose_name = "Activity Log"
        verbose_name_plural = "Activity Logs"

    def __str__(self):
        return f"{self.action} - {self.timestamp}"

    @classmethod
    def record(cls, user, action: str, details: str = "") -> "ActivityLog":
        if user is not None and not user.is_authenticated:
            user = None
        return cls.objects.create(user=user, action=action, details=details)
