"""Masking of customer identifiers before they reach logs"""


def mask_digits(value: str | None, visible: int = 2) -> str:
    """Keep the last ``visible`` characters: '123456' -> '****56'"""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
