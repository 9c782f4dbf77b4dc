"""
Cart errors — recoverable, local, shown next to the control that caused them.

Cart state is never changed when one of these is returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from quotecart._types import Money


class CartErrorKind(Enum):
    """Kinds of cart errors."""

    # Promo code input
    CODE_EMPTY = auto()
    INVALID_CODE = auto()
    CODE_EXPIRED = auto()
    NOT_APPLICABLE_VIA_CODE = auto()  # CONTRACT offers go through the term selector
    NO_ELIGIBLE_ITEMS = auto()  # code is fine, nothing in the cart can take it
    # Line edits
    INVALID_QUANTITY = auto()
    INVALID_OVERRIDE_AMOUNT = auto()
    # Lookups
    ITEM_NOT_FOUND = auto()
    PRODUCT_NOT_FOUND = auto()
    DISCOUNT_NOT_FOUND = auto()
    # Picker
    DISCOUNT_NOT_ELIGIBLE = auto()
    ITEM_UNDER_CONTRACT = auto()


@dataclass(frozen=True, slots=True)
class CartError:
    kind: CartErrorKind
    message: str


class CartErrors:
    @staticmethod
    def code_empty() -> CartError:
        return CartError(CartErrorKind.CODE_EMPTY, "Enter a promo code")

    @staticmethod
    def invalid_code() -> CartError:
        return CartError(CartErrorKind.INVALID_CODE, "Invalid promo code")

    @staticmethod
    def code_expired() -> CartError:
        return CartError(CartErrorKind.CODE_EXPIRED, "This promo code has expired.")

    @staticmethod
    def not_applicable_via_code() -> CartError:
        return CartError(
            CartErrorKind.NOT_APPLICABLE_VIA_CODE,
            "Contract discounts must be selected via the term selector.",
        )

    @staticmethod
    def no_eligible_items() -> CartError:
        return CartError(
            CartErrorKind.NO_ELIGIBLE_ITEMS,
            "Code valid, but not applicable to eligible items in cart",
        )

    @staticmethod
    def invalid_quantity(quantity: int) -> CartError:
        return CartError(
            CartErrorKind.INVALID_QUANTITY,
            f"Quantity must be at least 1 (got {quantity})",
        )

    @staticmethod
    def invalid_override_amount(amount: Money) -> CartError:
        return CartError(
            CartErrorKind.INVALID_OVERRIDE_AMOUNT,
            f"Override amount cannot be negative (got {amount})",
        )

    @staticmethod
    def item_not_found(item_id: str) -> CartError:
        return CartError(CartErrorKind.ITEM_NOT_FOUND, f"No cart item {item_id!r}")

    @staticmethod
    def product_not_found(product_id: str) -> CartError:
        return CartError(CartErrorKind.PRODUCT_NOT_FOUND, f"No product {product_id!r}")

    @staticmethod
    def discount_not_found(discount_id: str) -> CartError:
        return CartError(CartErrorKind.DISCOUNT_NOT_FOUND, f"No discount {discount_id!r}")

    @staticmethod
    def discount_not_eligible(discount_name: str, item_id: str) -> CartError:
        return CartError(
            CartErrorKind.DISCOUNT_NOT_ELIGIBLE,
            f"{discount_name} cannot be applied to {item_id!r}",
        )

    @staticmethod
    def item_under_contract(item_id: str) -> CartError:
        return CartError(
            CartErrorKind.ITEM_UNDER_CONTRACT,
            f"{item_id!r} is committed to a contract term; its offer comes from the term selector",
        )


__all__ = ("CartErrorKind", "CartError", "CartErrors")
