"""Slug derivation for product names."""

from __future__ import annotations

import hashlib
import re
import unicodedata

SLUG_SEPARATOR = "-"

FALLBACK_PREFIX = "product"

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify_name(name: str) -> str:
    """Turn a product name into a URL-safe lookup key.

    Accents are folded to ASCII, the result is lower-cased and every run
    of non-alphanumeric characters becomes a single ``-``::

        >>> slugify_name("Test Product")
        'test-product'
        >>> slugify_name("  Café & Crème -- 2kg! ")
        'cafe-creme-2kg'

    Names with no ASCII letter or digit left after folding ("!!!", "日本語")
    get ``product-`` plus a short digest of the name, so the slug is never
    empty and stays a function of the name.

    Idempotent: ``slugify_name(slugify_name(x)) == slugify_name(x)``.
    """
    folded = (
        unicodedata.normalize("NFKD", str(name))
        .encode("ascii", "ignore")
        .decode("ascii")
        .lower()
    )
    slug = _NON_ALNUM_RUN.sub(SLUG_SEPARATOR, folded).strip(SLUG_SEPARATOR)
    if slug:
        return slug
    digest = hashlib.sha1(str(name).encode("utf-8")).hexdigest()[:10]
    return f"{FALLBACK_PREFIX}{SLUG_SEPARATOR}{digest}"
