"""
User manager for email login.

Users are identified by email; full_name is the display name shown in
chats, friend lists and derived group names.

Related files:
    - models.py: User model that uses this manager
    - services.py: AuthService.signup() goes through create_user()
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Manager for User with email as the login field.

    Usage:
        user = User.objects.create_user(
            email="ada@example.com",
            password="secret1",
            full_name="Ada Lovelace",
        )
        admin = User.objects.create_superuser("root@example.com", "secret1")
    """

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("The Email field must be set")

        extra_fields["full_name"] = (extra_fields.get("full_name") or "").strip()
        user = self.model(email=self.normalize_email(email), **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        """
        Create a regular account.

        Raises:
            ValueError: If email is empty
        """
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create an admin-site account.

        full_name defaults to "Administrator" so createsuperuser can skip it.

        Raises:
            ValueError: If is_staff or is_superuser is explicitly False
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("full_name", "Administrator")

        if extra_fields["is_staff"] is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields["is_superuser"] is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)
