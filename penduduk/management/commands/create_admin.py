"""
Django management command to create an administrator account.

An existing account with the same email is promoted to the admin role and
its password is reset.

Usage:
    python manage.py create_admin --email admin@desa.id --name "Admin Desa" --password secret123
"""

from django.core.management.base import BaseCommand, CommandError
from penduduk.models import User


class Command(BaseCommand):
    help = "Create or promote an administrator account for the penduduk admin panel"

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--name", default="Administrator")
        parser.add_argument("--password", required=True)

    def handle(self, *args, **options):
        email = options["email"]
        password = options["password"]
        if len(password) < 8:
            raise CommandError("Password must be at least 8 characters")

        user = User.objects.filter(email__iexact=email).first()
        if user:
            user.role = User.ROLE_ADMIN
            user.is_staff = True
            user.set_password(password)
            user.save()
            self.stdout.write(self.style.WARNING(f"Promoted existing account {user.email} to admin"))
            return

        user = User.objects.create_user(
            email=email,
            password=password,
            name=options["name"],
            role=User.ROLE_ADMIN,
            is_staff=True,
        )
        self.stdout.write(self.style.SUCCESS(f"Created admin account {user.email}"))
