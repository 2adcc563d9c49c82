from __future__ import annotations

import logging

from ..logging.sink import DiagnosticSink

"""Language code normalization and the reference set of known codes.

Codes are canonicalized as lowercase language subtag + uppercase region subtag
joined by '-' ("EN_us" -> "en-US"). Unknown codes are accepted; they only produce
a warning through the diagnostic sink.
"""

__all__ = [
    "KNOWN_LANG_CODES",
    "normalize_lang_code",
    "is_known_lang_code",
    "warn_unknown_lang_code",
]

logger = logging.getLogger(__name__)

# ISO 639-1 languages and common language-region pairs (ISO 3166-1 alpha-2)
KNOWN_LANG_CODES: frozenset[str] = frozenset({
    "af", "ar", "az", "be", "bg", "bs", "ca", "cs", "cy", "da", "de", "dv", "el", "en", "eo",
    "es", "et", "eu", "fa", "fi", "fo", "fr", "gl", "gu", "he", "hi", "hr", "hu", "hy", "id",
    "is", "it", "ja", "ka", "kk", "kn", "ko", "kok", "ky", "lt", "lv", "mi", "mk", "mn", "mr",
    "ms", "mt", "nb", "nl", "nn", "ns", "pa", "pl", "ps", "pt", "qu", "ro", "ru", "sa", "se",
    "sk", "sl", "sq", "sr", "sv", "sw", "syr", "ta", "te", "th", "tl", "tn", "tr", "tt", "ts",
    "uk", "ur", "uz", "vi", "xh", "zh", "zu",
    "af-ZA", "ar-AE", "ar-BH", "ar-DZ", "ar-EG", "ar-IQ", "ar-JO", "ar-KW", "ar-LB", "ar-LY",
    "ar-MA", "ar-OM", "ar-QA", "ar-SA", "ar-SY", "ar-TN", "ar-YE", "az-AZ", "be-BY", "bg-BG",
    "bs-BA", "ca-ES", "cs-CZ", "cy-GB", "da-DK", "de-AT", "de-CH", "de-DE", "de-LI", "de-LU",
    "dv-MV", "el-GR", "en-AU", "en-BZ", "en-CA", "en-CB", "en-GB", "en-IE", "en-JM", "en-NZ",
    "en-PH", "en-TT", "en-US", "en-ZA", "en-ZW", "es-AR", "es-BO", "es-CL", "es-CO", "es-CR",
    "es-DO", "es-EC", "es-ES", "es-GT", "es-HN", "es-MX", "es-NI", "es-PA", "es-PE", "es-PR",
    "es-PY", "es-SV", "es-UY", "es-VE", "et-EE", "eu-ES", "fa-IR", "fi-FI", "fo-FO", "fr-BE",
    "fr-CA", "fr-CH", "fr-FR", "fr-LU", "fr-MC", "gl-ES", "gu-IN", "he-IL", "hi-IN", "hr-BA",
    "hr-HR", "hu-HU", "hy-AM", "id-ID", "is-IS", "it-CH", "it-IT", "ja-JP", "ka-GE", "kk-KZ",
    "kn-IN", "ko-KR", "kok-IN", "ky-KG", "lt-LT", "lv-LV", "mi-NZ", "mk-MK", "mn-MN", "mr-IN",
    "ms-BN", "ms-MY", "mt-MT", "nb-NO", "nl-BE", "nl-NL", "nn-NO", "ns-ZA", "pa-IN", "pl-PL",
    "ps-AR", "pt-BR", "pt-PT", "qu-BO", "qu-EC", "qu-PE", "ro-RO", "ru-RU", "sa-IN", "se-FI",
    "se-NO", "se-SE", "sk-SK", "sl-SI", "sq-AL", "sr-BA", "sr-SP", "sv-FI", "sv-SE", "sw-KE",
    "syr-SY", "ta-IN", "te-IN", "th-TH", "tl-PH", "tn-ZA", "tr-TR", "tt-RU", "uk-UA", "ur-PK",
    "uz-UZ", "vi-VN", "xh-ZA", "zh-CN", "zh-HK", "zh-MO", "zh-SG", "zh-TW", "zu-ZA",
})


def normalize_lang_code(code: str) -> str:
    """Canonicalize a language label: "EN" -> "en", "zh_cn" -> "zh-CN".

    Only the first '-' / '_' splits language from region; the remainder is
    uppercased as a whole. Idempotent on canonical codes.
    """
    lang, sep, region = code.replace("_", "-").partition("-")
    if sep:
        return f"{lang.lower()}-{region.upper()}"
    return code.lower()


def is_known_lang_code(code: str) -> bool:
    return normalize_lang_code(code) in KNOWN_LANG_CODES


def warn_unknown_lang_code(code: str, sink: DiagnosticSink | None = None) -> None:
    message = (
        f"Unknown language code '{code}'. "
        "Unable to determine which language this represents."
    )
    if sink is not None:
        sink.warn(message)
    else:
        logger.warning(message)
