# public/views/throttles.py

"""
Anonymous rate scopes for the storefront. Rates live in
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"].
"""

from rest_framework.throttling import AnonRateThrottle


class PublicCatalogThrottle(AnonRateThrottle):
    scope = "public_catalog"


class PublicWriteThrottle(AnonRateThrottle):
    scope = "public_write"


class PublicPollThrottle(AnonRateThrottle):
    scope = "public_poll"


class WebhookThrottle(AnonRateThrottle):
    scope = "webhook"
