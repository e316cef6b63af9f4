from decimal import Decimal, ROUND_HALF_UP

from django import template

register = template.Library()


def format_euro(amount):
    """Format an amount the German way: 1.234,50 €"""
    amount = Decimal(amount).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    whole, _, cents = f"{amount:,.2f}".partition('.')
    return f"{whole.replace(',', '.')},{cents} €"


@register.filter
def euro(value):
    if value in (None, ''):
        return ''
    return format_euro(value)
