"""Localization library: locale negotiation and message lookup.

Public API:
    - ``Locale``: Supported locales with ``Locale.parse`` for Accept-Language values
    - ``select_locale``: Pick a locale from a ``lang`` parameter and header
    - ``MessageCatalog``: Resolve message keys for a locale with fallback
"""

from identity_api.lib.i18n.catalog import MessageCatalog
from identity_api.lib.i18n.locale import DEFAULT_LOCALE, Locale, select_locale

__all__ = [
    "DEFAULT_LOCALE",
    "Locale",
    "MessageCatalog",
    "select_locale",
]
