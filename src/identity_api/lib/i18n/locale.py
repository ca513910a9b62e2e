"""Locale negotiation from ``Accept-Language`` headers and ``lang`` parameters."""

import enum


class Locale(enum.StrEnum):
    """Locales with a message catalog."""

    EN = "en"
    JA = "ja"
    ZH = "zh"

    @classmethod
    def parse(cls, header: str | None, default: "Locale | None" = None) -> "Locale":
        """Map an ``Accept-Language`` value to a supported locale.

        Only the first language tag is considered; its q-value is ignored.
        Unknown tags fall back to ``default``.

        Args:
            header: Raw header value, e.g. ``"ja-JP,ja;q=0.9,en;q=0.8"``.
            default: Locale returned when nothing matches (English if omitted).

        Returns:
            The selected locale.
        """
        fallback = default or DEFAULT_LOCALE
        if header is None or not header.strip():
            return fallback
        primary = header.split(",")[0].split(";")[0].strip().lower()
        return _TAG_ALIASES.get(primary, fallback)


DEFAULT_LOCALE = Locale.EN

_TAG_ALIASES: dict[str, Locale] = {
    "en": Locale.EN,
    "en-us": Locale.EN,
    "en-gb": Locale.EN,
    "ja": Locale.JA,
    "ja-jp": Locale.JA,
    "zh": Locale.ZH,
    "zh-cn": Locale.ZH,
    "zh-hans": Locale.ZH,
}


def select_locale(lang: str | None, accept_language: str | None, default: Locale = DEFAULT_LOCALE) -> Locale:
    """Choose the response locale for a request.

    An explicit ``lang`` query parameter wins over the header.

    Args:
        lang: Value of the ``lang`` query parameter, if any.
        accept_language: Value of the ``Accept-Language`` header, if any.
        default: Locale used when neither selects a supported one.

    Returns:
        The selected locale.
    """
    if lang and lang.strip():
        return Locale.parse(lang, default)
    return Locale.parse(accept_language, default)
