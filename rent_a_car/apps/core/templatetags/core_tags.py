from django import template

from apps.bookings.utils import format_price

register = template.Library()


@register.filter
def price(value):
    """{{ vehicle.price|price }} -> "1.789,66" """
    return format_price(value)

