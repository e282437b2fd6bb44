from django.utils.text import slugify


def owner_id_from(user) -> str:
    """Return the opaque owner identifier for an authenticated user."""
    return str(user.id)


def generate_sku(source: str, *others: str) -> str:
    """
    Build a short SKU from free text.

    Every word of ``source`` contributes its first three characters,
    upper-cased, and so does every extra fragment in ``others``:

        >>> generate_sku('Iced Latte 12oz / Hot')
        'ICE-LAT-12O-HOT'
    """
    tokens = [token for token in slugify(source).split('-') if token]
    parts = [token[:3].upper() for token in tokens]
    parts.extend(other[:3].upper() for other in others if other)
    return '-'.join(parts)
