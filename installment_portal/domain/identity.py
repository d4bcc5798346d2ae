"""Identity resolution: trailing phone digits -> customer"""

import re

from installment_portal.config import settings
from installment_portal.domain.exceptions import NotFoundError, ValidationError
from installment_portal.domain.models import Customer

SUFFIX_LENGTH_MESSAGE = "Masukkan 4-6 digit terakhir nomor HP"

_NON_DIGITS = re.compile(r"\D")


def normalize_suffix(raw: str | None) -> str:
    """Strip everything that is not a digit"""
    return _NON_DIGITS.sub("", raw or "")


async def resolve_customer(
    store,
    raw_suffix: str | None,
    min_digits: int | None = None,
    max_digits: int | None = None,
) -> Customer:
    """
    Find the customer whose phone number ends with the supplied digits.

    ``store`` is any backing-store adapter exposing
    ``find_customers_by_phone_suffix``. Digit bounds default to
    ``settings.min_suffix_digits`` / ``settings.max_suffix_digits``.

    If several customers share the suffix, the first row the store returns
    wins. Which one that is depends on the store and is not guaranteed.

    Raises:
        ValidationError: too few or too many digits (no query issued)
        NotFoundError: no customer matches
        RetrievalError: the store query failed
    """
    min_digits = settings.min_suffix_digits if min_digits is None else min_digits
    max_digits = settings.max_suffix_digits if max_digits is None else max_digits

    suffix = normalize_suffix(raw_suffix)
    if len(suffix) < min_digits:
        raise ValidationError(f"Suffix has {len(suffix)} digits, need at least {min_digits}")
    if len(suffix) > max_digits:
        raise ValidationError(
            f"Suffix has {len(suffix)} digits, at most {max_digits} allowed",
            user_message=SUFFIX_LENGTH_MESSAGE,
        )

    matches = await store.find_customers_by_phone_suffix(suffix, limit=1)
    if not matches:
        raise NotFoundError(f"No customer phone ends with {len(suffix)}-digit suffix")

    return matches[0]
