"""Best-applicable discount selection.

The backend's order endpoint only understands a percentage, so a chosen
FixedAmount discount is converted at the boundary by
``effective_discount_percent``.

Selection compares the raw ``value`` of every eligible discount regardless
of type: a 15% discount beats a $10 one and a $20 one beats a 15% one.
This mirrors the behaviour staff are used to and is kept for
compatibility; it is not a value-maximising policy.
"""

from backoffice.discount.discount import Discount


def select_best_discount(discounts, subtotal, item_count) -> Discount | None:
    """Return the eligible discount with the greatest raw value, or None.

    Eligible means active and meeting both the min-spend and min-items
    conditions. Ties go to the discount that appears first in ``discounts``.
    """
    best = None
    for discount in discounts:
        if not discount.applies_to(subtotal, item_count):
            continue
        if best is None or discount.value > best.value:
            best = discount
    return best


def effective_discount_percent(discount: Discount | None, subtotal) -> float | None:
    """Express ``discount`` as the percentage the order endpoint expects."""
    if discount is None:
        return None
    if discount.is_percentage:
        return float(discount.value)
    if subtotal > 0:
        return (discount.value / subtotal) * 100
    return 0.0


def discount_amount(discount: Discount | None, subtotal) -> float:
    """Currency amount ``discount`` takes off ``subtotal``."""
    if discount is None or subtotal <= 0:
        return 0.0
    if discount.is_percentage:
        return subtotal * discount.value / 100
    return float(min(discount.value, subtotal))
