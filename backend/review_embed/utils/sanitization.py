"""HTML sanitization"""

import bleach


def sanitize_photo_markup(markup: str) -> str:
    """
    Sanitize reviewer photo markup.

    Allows only <img> with src + alt; sources other than http(s) are dropped.
    """
    allowed_tags = ["img"]
    allowed_attributes = {
        "img": ["src", "alt"]
    }

    clean = bleach.clean(
        markup,
        tags=allowed_tags,
        attributes=allowed_attributes,
        protocols=["http", "https"],
        strip=True
    )

    return clean
