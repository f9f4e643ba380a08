# ecocatalog/services/parameter_validator.py

import logging
from typing import Any, Optional

from ..core.config import settings
from ..core.exceptions import raise_invalid_parameter

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"

# Largest value an INTEGER column holds on every supported backend
MAX_INT = 2**31 - 1


class ParameterValidator:
    """
    Validates catalog and ledger inputs before they reach the database.
    Malformed values are rejected instead of being coerced to a default.
    """

    MIN_LIMIT = 1
    MIN_OFFSET = 0
    MIN_AGE = 1
    MIN_QUANTITY = 1

    @staticmethod
    def require_int(name: str, value: Any) -> int:
        # bool is an int subclass; True is not a page size
        if isinstance(value, bool) or not isinstance(value, int):
            raise_invalid_parameter(name, value, "an integer")
        if not -MAX_INT - 1 <= value <= MAX_INT:
            raise_invalid_parameter(name, value, f"an integer between {-MAX_INT - 1} and {MAX_INT}")
        return value

    @classmethod
    def validate_limit(cls, limit: Any) -> int:
        limit = cls.require_int("limit", limit)
        if limit < cls.MIN_LIMIT or limit > settings.MAX_PAGE_SIZE:
            raise_invalid_parameter("limit", limit, f"an integer between {cls.MIN_LIMIT} and {settings.MAX_PAGE_SIZE}")
        return limit

    @classmethod
    def validate_offset(cls, offset: Any) -> int:
        offset = cls.require_int("offset", offset)
        if offset < cls.MIN_OFFSET:
            raise_invalid_parameter("offset", offset, "a non-negative integer")
        return offset

    @classmethod
    def validate_age(cls, age: Any) -> int:
        if age is None:
            raise_invalid_parameter("age", age, "Age and gender are required")
        age = cls.require_int("age", age)
        if age < cls.MIN_AGE:
            raise_invalid_parameter("age", age, "a positive integer")
        return age

    @staticmethod
    def validate_gender(gender: Any) -> str:
        if gender is None or not isinstance(gender, str) or not gender.strip():
            raise_invalid_parameter("gender", gender, "Age and gender are required")
        return gender.strip()

    @classmethod
    def validate_quantity(cls, quantity: Any) -> int:
        quantity = cls.require_int("quantity", quantity)
        if quantity < cls.MIN_QUANTITY:
            raise_invalid_parameter("quantity", quantity, "an integer of at least 1")
        return quantity

    @staticmethod
    def normalize_category(category: Optional[str]) -> Optional[str]:
        """``None``, blank and ``"all"`` all mean no category filter."""
        if category is None:
            return None
        category = category.strip()
        if not category or category == ALL_CATEGORIES:
            return None
        return category

    @staticmethod
    def normalize_query(query: Optional[str]) -> Optional[str]:
        if query is None:
            return None
        query = query.strip()
        return query or None
