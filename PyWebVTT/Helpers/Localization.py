"""
Message translation for user-facing text.

Messages are marked with _() and looked up in gettext catalogs under PyWebVTT/locales.
When no catalog exists for the active language the message is returned unchanged.
"""
import gettext
import logging
import os

_domain = "pywebvtt"
_locales_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "locales")
_translation : gettext.NullTranslations = gettext.NullTranslations()
_language : str = "en"

def initialize_localization(language : str|None = None) -> None:
    """
    Load the catalog for the requested language, falling back to identity translation
    """
    global _translation, _language
    _language = language or "en"
    _translation = gettext.translation(_domain, localedir=_locales_dir, languages=[_language], fallback=True)
    if type(_translation) is gettext.NullTranslations and _language != "en":
        logging.debug(f"No message catalog for '{_language}', messages will not be translated")

def set_language(language : str) -> None:
    initialize_localization(language)

def get_language() -> str:
    return _language

def get_available_locales() -> list[str]:
    """
    List languages that have a message catalog, always including English
    """
    locales = { "en" }
    if os.path.isdir(_locales_dir):
        for entry in os.listdir(_locales_dir):
            if os.path.isfile(os.path.join(_locales_dir, entry, "LC_MESSAGES", f"{_domain}.mo")):
                locales.add(entry)
    return sorted(locales)

def _(message : str) -> str:
    return _translation.gettext(message)
