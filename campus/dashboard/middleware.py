import logging

from django.conf import settings
from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError
from django.dispatch import receiver
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)


class DemoSeedResetMiddleware(MiddlewareMixin):
    """
    Keeps the login/logout receivers below registered so a DEMO_MODE
    deployment is reseeded to its baseline at every login and logout.
    """

    def __init__(self, get_response=None):
        super().__init__(get_response)


def reseed_demo_data():
    try:
        call_command("seed_demo", reset=True, verbosity=0)
    except (CommandError, DatabaseError):
        # A failed reseed must not block the login flow
        logger.error("Demo reseed failed", exc_info=True)


@receiver(user_logged_in)
def on_user_logged_in(sender, user, request, **kwargs):
    if settings.DEMO_MODE:
        reseed_demo_data()


@receiver(user_logged_out)
def on_user_logged_out(sender, user, request, **kwargs):
    if settings.DEMO_MODE:
        reseed_demo_data()
