"""
Gravatar avatar URLs.

The URL is derived from the md5 of the trimmed, lower-cased email, which is
how gravatar keys its images. The stored email itself is never normalised.
"""
import hashlib
from urllib.parse import urlencode

from devconnect.core.config import get_settings

GRAVATAR_BASE_URL = "//www.gravatar.com/avatar/"


def gravatar_url(email: str, size: str = None, rating: str = None, default: str = None) -> str:
    settings = get_settings()
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({
        "s": size or settings.gravatar_size,
        "r": rating or settings.gravatar_rating,
        "d": default or settings.gravatar_default,
    })
    return f"{GRAVATAR_BASE_URL}{digest}?{query}"
