"""
Tests for the create_admin management command.
"""

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from penduduk.models import User


@pytest.mark.django_db
class TestCreateAdminCommand:
    def test_creates_admin(self):
        call_command("create_admin", "--email", "admin@desa.id", "--password", "rahasia123")

        user = User.objects.get(email="admin@desa.id")
        assert user.is_admin
        assert user.is_staff
        assert user.name == "Administrator"
        assert user.check_password("rahasia123")

    def test_promotes_existing_account(self, create_penduduk):
        penduduk = create_penduduk(nama="Budi", email="budi@x.com")

        call_command("create_admin", "--email", "budi@x.com", "--password", "barubaru123")

        user = User.objects.get(pk=penduduk.user_id)
        assert user.is_admin
        assert user.check_password("barubaru123")
        assert User.objects.count() == 1

    def test_rejects_short_password(self):
        with pytest.raises(CommandError):
            call_command("create_admin", "--email", "admin@desa.id", "--password", "pendek")

        assert not User.objects.exists()
