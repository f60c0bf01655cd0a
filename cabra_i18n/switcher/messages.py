"""Announcement strings for language changes.

Kept outside the translation bundles: the error message must be readable
even when the bundle for the requested locale failed to load.
"""

from typing import Dict

from cabra_i18n.i18n.locales import DEFAULT_LOCALE, FALLBACK_LOCALE

CHANGE_ANNOUNCEMENTS: Dict[str, str] = {
    "pt-BR": "Idioma alterado para Português",
    "en": "Language changed to English",
    "es": "Idioma cambiado a Español",
    "ar": "تم تغيير اللغة إلى العربية",
    "hi": "भाषा हिन्दी में बदल दी गई",
    "ja": "言語が日本語に変更されました",
    "ru": "Язык изменён на русский",
}

ERROR_ANNOUNCEMENTS: Dict[str, str] = {
    "pt-BR": "Erro ao mudar idioma. Tente novamente.",
    "en": "Could not change the language. Please try again.",
    "es": "Error al cambiar el idioma. Inténtelo de nuevo.",
    "ar": "حدث خطأ أثناء تغيير اللغة. حاول مرة أخرى.",
    "hi": "भाषा बदलने में त्रुटि। कृपया पुनः प्रयास करें।",
    "ja": "言語を変更できませんでした。もう一度お試しください。",
    "ru": "Не удалось сменить язык. Попробуйте ещё раз.",
}


def _pick(messages: Dict[str, str], locale: str) -> str:
    if locale in messages:
        return messages[locale]
    return messages.get(FALLBACK_LOCALE, messages[DEFAULT_LOCALE])


def change_announcement(locale: str) -> str:
    """Message read out after switching to ``locale``, in that language."""
    return _pick(CHANGE_ANNOUNCEMENTS, locale)


def error_announcement(locale: str) -> str:
    return _pick(ERROR_ANNOUNCEMENTS, locale)
