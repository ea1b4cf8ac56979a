"""
Cache invalidation signals
Automatically invalidate dashboard caches when research data changes
"""
from contextlib import contextmanager
import logging
import threading

from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from .cache_utils import invalidate_dashboard_cache

logger = logging.getLogger(__name__)

# Apps whose rows feed the dashboard aggregates
TRACKED_APP_LABELS = {
    'projects', 'planning', 'team', 'finance', 'documents',
    'risks', 'outputs', 'analytics',
}

_thread_locals = threading.local()


@contextmanager
def suspend_cache_signals():
    """
    Temporarily suspend cache invalidation signals for bulk operations.
    The caller is responsible for invalidating once the block finishes.
    """
    previous = is_suspended()
    try:
        _thread_locals.suspended = True
        yield
    finally:
        _thread_locals.suspended = previous


def is_suspended():
    return getattr(_thread_locals, 'suspended', False)


@receiver([post_save, post_delete])
def invalidate_dashboard_on_change(sender, instance, **kwargs):
    """Invalidate dashboard caches when any tracked research record changes"""
    if is_suspended():
        return

    meta = getattr(sender, '_meta', None)
    if meta is None or meta.app_label not in TRACKED_APP_LABELS:
        return

    logger.debug(f"{sender.__name__} changed, invalidating dashboard cache")
    invalidate_dashboard_cache()
