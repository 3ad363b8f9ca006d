"""Signal handlers for core app."""

import logging

from django.core.signals import setting_changed
from django.dispatch import receiver

from server.apps.core.services import SERVICE_SETTINGS, reset_services

logger = logging.getLogger(__name__)


@receiver(setting_changed)
def rebuild_services_on_setting_change(
    sender: object,
    setting: str,
    **kwargs: object,
) -> None:
    """Drop the wired services when a setting they depend on changes.

    Args:
        sender: Signal sender.
        setting: Name of the changed setting.
        **kwargs: Additional signal arguments.
    """
    if setting in SERVICE_SETTINGS:
        logger.debug('Setting %s changed, resetting services', setting)
        reset_services()
