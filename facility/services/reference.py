"""Cached reference lists used by forms (activity types, donation categories)."""
from __future__ import annotations

from django.conf import settings
from django.core.cache import cache

from facility.models import ActivityType, DonationCategory

ACTIVITY_TYPES_KEY = 'reference:activity-types'
DONATION_CATEGORIES_KEY = 'reference:donation-categories'


def activity_types() -> list[dict]:
    cached = cache.get(ACTIVITY_TYPES_KEY)
    if cached is not None:
        return cached
    payload = list(
        ActivityType.objects.order_by('name').values('id', 'name', 'description', 'category', 'color', 'icon')
    )
    cache.set(ACTIVITY_TYPES_KEY, payload, settings.REFERENCE_CACHE_SECONDS)
    return payload


def donation_categories() -> list[dict]:
    cached = cache.get(DONATION_CATEGORIES_KEY)
    if cached is not None:
        return cached
    payload = list(DonationCategory.objects.order_by('type', 'name').values('id', 'name', 'type', 'description'))
    cache.set(DONATION_CATEGORIES_KEY, payload, settings.REFERENCE_CACHE_SECONDS)
    return payload


def invalidate() -> None:
    cache.delete_many([ACTIVITY_TYPES_KEY, DONATION_CATEGORIES_KEY])
