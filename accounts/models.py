from django.contrib.auth.models import AbstractUser
from django.db import models


class CustomUser(AbstractUser):
    """
    Custom user model.

    Email is unique so proposals can reference clients and service
    providers by email address.
    """

    class AuthProvider(models.TextChoices):
        LOCAL = "LOCAL", "Local"
        GOOGLE = "GOOGLE", "Google"

    email = models.EmailField("email address", unique=True)
    auth_provider = models.CharField(
        max_length=20, choices=AuthProvider.choices, default=AuthProvider.LOCAL
    )

    class Meta:
        db_table = "user_account"

    def __str__(self):
        return self.email
