"""
Site copy - toasts, banners and form errors keyed by name.
Unknown keys render as the key itself so a missing string is visible, not fatal.
"""

from locales.en import EN_STRINGS


def t(key: str, **kwargs) -> str:
    """Look up a string and fill its {placeholders}."""
    text = EN_STRINGS.get(key, key)
    return text.format(**kwargs) if kwargs else text
