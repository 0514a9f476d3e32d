from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class ActiveUserManager(UserManager):
    """Manager that hides soft-deleted accounts"""

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class User(AbstractUser):
    """
    Platform user carrying a cached points balance.

    ``points`` mirrors the sum of the user's points ledger. It is only
    mutated by the exchange coordinator, in the same transaction as the
    matching ledger append, so the cache never drifts from the ledger.
    """
    phone = models.CharField(max_length=20, null=True, blank=True)
    points = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = UserManager()
    active_objects = ActiveUserManager()

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        constraints = [
            models.CheckConstraint(
                condition=models.Q(points__gte=0),
                name='users_points_non_negative',
            ),
        ]

    def __str__(self):
        return self.username or self.phone or f"User {self.id}"

    @property
    def is_admin(self):
        """Admins are staff or superusers"""
        return self.is_staff or self.is_superuser

    @property
    def is_deleted(self):
        return self.deleted_at is not None
