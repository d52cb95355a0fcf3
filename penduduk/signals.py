import logging

from django.conf import settings
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from penduduk.models import Penduduk
from penduduk.rabbitmq import publisher

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Penduduk)
def penduduk_post_save(sender, instance, created, **kwargs):
    """Announce new and changed records once the surrounding transaction commits."""
    if not settings.PENDUDUK_EVENTS_ENABLED:
        return

    payload = publisher.penduduk_payload(instance)
    publish = publisher.publish_penduduk_created if created else publisher.publish_penduduk_updated
    transaction.on_commit(lambda: _publish(publish, payload))


@receiver(post_delete, sender=Penduduk)
def penduduk_post_delete(sender, instance, **kwargs):
    """Fires for direct deletes as well as the cascade from a deleted account."""
    if not settings.PENDUDUK_EVENTS_ENABLED:
        return

    payload = publisher.penduduk_payload(instance)
    transaction.on_commit(lambda: _publish(publisher.publish_penduduk_deleted, payload))


def _publish(publish, payload):
    if not publish(payload):
        logger.warning(f"Lifecycle event for penduduk {payload['id']} was not published")
