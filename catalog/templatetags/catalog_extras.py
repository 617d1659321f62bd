from decimal import Decimal, InvalidOperation

from django import template

from catalog.rarity import RARITY_COLORS, normalize_rarity

register = template.Library()


@register.filter
def usd(value):
    """Formats 1234.5 as $1,234.50."""
    if value in (None, ""):
        return "-"
    try:
        val = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return value
    return f"${val:,.2f}"


@register.filter
def rarity_color(value):
    return RARITY_COLORS[normalize_rarity(value)]


@register.filter
def rarity_label(value):
    return normalize_rarity(value).title()

