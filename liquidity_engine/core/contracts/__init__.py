"""
Contract Validation Module

Валидация сырых payload леджера против JSON Schema контрактов.
"""

from .validators import (
    AMMPoolValidator,
    BookOfferValidator,
    ContractValidator,
    SchemaLoader,
    validate_amm_pool,
    validate_book_offer,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BookOfferValidator",
    "AMMPoolValidator",
    # Functions
    "validate_book_offer",
    "validate_amm_pool",
]
