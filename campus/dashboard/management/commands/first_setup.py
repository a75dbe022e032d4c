from django.core.management.base import BaseCommand
from django.core.management import call_command
from django.contrib.auth.models import User, Group
from decouple import config

from base.constants import Role
from base.models import Profile


class Command(BaseCommand):
    help = "Initial setup: migrate, create role groups, create superuser"

    def handle(self, *args, **options):
        self.stdout.write("Applying migrations...")
        call_command("migrate")

        for role in Role:
            group, created = Group.objects.get_or_create(name=role.value)
            if created:
                self.stdout.write(f"Created group: {role.value}")
            else:
                self.stdout.write(f"Group {role.value} already exists")

        # Superuser from env vars
        username = config("DJANGO_SUPERUSER_USERNAME").upper()
        email = config("DJANGO_SUPERUSER_EMAIL", default="")
        password = config("DJANGO_SUPERUSER_PASSWORD")

        if User.objects.filter(username=username).exists():
            self.stdout.write(f"Superuser {username} already exists")
            return

        user = User.objects.create_superuser(
            username=username, email=email, password=password
        )
        user.groups.add(Group.objects.get(name=Role.CHAIRMAN))
        Profile.objects.create(
            user=user,
            role=Role.CHAIRMAN,
            status=Profile.Status.APPROVED,
            approved_by="system",
        )
        self.stdout.write(
            self.style.SUCCESS(f"Created superuser: {username} and assigned to Chairman group")
        )
