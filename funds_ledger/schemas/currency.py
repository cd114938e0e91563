"""
Supported currencies.
"""

USD = "USD"
EUR = "EUR"
CAD = "CAD"

SUPPORTED_CURRENCIES = frozenset({USD, EUR, CAD})


def is_supported_currency(currency: str) -> bool:
    return currency in SUPPORTED_CURRENCIES


def validate_currency(value: str) -> str:
    """Field validator body shared by the request schemas."""
    if not is_supported_currency(value):
        raise ValueError(
            f"unsupported currency '{value}', "
            f"expected one of {sorted(SUPPORTED_CURRENCIES)}"
        )
    return value
