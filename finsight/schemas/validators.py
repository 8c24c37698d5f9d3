# finsight/schemas/validators.py
"""
Reusable validation functions for Pydantic schemas.

- Symbol validation and normalization (uppercase at entry)
- Currency code validation
"""

import re

# Symbol: 1-20 chars, uppercase alphanumerics, dots and dashes (BRK.B, BF-B)
SYMBOL_PATTERN = re.compile(r'^[A-Z0-9][A-Z0-9.\-]{0,19}$')
SYMBOL_MAX_LENGTH = 20

# Currency: ISO 4217 format (3 uppercase letters)
CURRENCY_PATTERN = re.compile(r'^[A-Z]{3}$')


def validate_symbol(value: str) -> str:
    """
    Validate and normalize a ticker symbol.

    Args:
        value: Raw symbol input (e.g., " aapl ")

    Returns:
        Normalized symbol (uppercase, trimmed)

    Raises:
        ValueError: If empty, too long, or containing invalid characters
    """
    if not value or not value.strip():
        raise ValueError("Symbol cannot be empty")

    normalized = value.strip().upper()

    if len(normalized) > SYMBOL_MAX_LENGTH:
        raise ValueError(f"Symbol cannot exceed {SYMBOL_MAX_LENGTH} characters")

    if not SYMBOL_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid symbol format: '{normalized}'. "
            "Symbol must be alphanumeric and may include dots (.) or dashes (-)"
        )

    return normalized


def validate_currency(value: str) -> str:
    """
    Validate and normalize a currency code.

    Raises:
        ValueError: If not a 3-letter ISO code
    """
    if not value:
        raise ValueError("Currency cannot be empty")

    normalized = value.strip().upper()

    if not CURRENCY_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid currency format: '{normalized}'. "
            "Currency must be a 3-letter ISO code (e.g., USD, EUR)"
        )

    return normalized
