from django.conf import settings

from .views import get_profile, get_user_role


def user_role(request):
    """Context processor to add the user's role and college to all templates"""
    ctx = {"DEMO_MODE": getattr(settings, "DEMO_MODE", False)}
    if request.user.is_authenticated:
        ctx["role"] = get_user_role(request.user)
        profile = get_profile(request.user)
        ctx["college"] = profile.college if profile else None
    return ctx


def college_group(request):
    return {"college_group_name": settings.COLLEGE_GROUP_NAME}
