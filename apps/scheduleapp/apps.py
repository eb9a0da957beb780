# apps/scheduleapp/apps.py
from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ScheduleAppConfig(AppConfig):
    name = "apps.scheduleapp"
    label = "scheduleapp"
    verbose_name = _("Schedule Management")
