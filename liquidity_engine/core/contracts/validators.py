"""
JSON Schema Contract Validators

Проверка сырых payload леджера до построения снапшота.

Схемы (package data, schema/):
- book_offer.json: offer из ответа book_offers
- amm_pool.json: объект amm из ответа amm_info

Validator на контракт строится один раз при первом обращении и
переиспользуется: ответ book_offers может содержать сотни offers.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

BOOK_OFFER_CONTRACT = "book_offer"
AMM_POOL_CONTRACT = "amm_pool"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение и meta-validation схем из каталога schema/."""

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени контракта (без .json), с кэшированием.

        Raises:
            FileNotFoundError: Файл схемы не найден
            ValueError: Схема не проходит meta-validation Draft 2020-12
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка payload против одной схемы контракта."""

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        self.schema_name = schema_name
        schema = (loader or SchemaLoader()).load_schema(schema_name)
        self._validator = Draft202012Validator(schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: наиболее релевантное нарушение
                (best_match: для oneOf сумм это ошибка ближайшей ветки)
        """
        error = best_match(self._validator.iter_errors(data))
        if error is not None:
            raise error


class BookOfferValidator(ContractValidator):
    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__(BOOK_OFFER_CONTRACT, loader)


class AMMPoolValidator(ContractValidator):
    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__(AMM_POOL_CONTRACT, loader)


@lru_cache(maxsize=None)
def _book_offer_validator() -> BookOfferValidator:
    return BookOfferValidator()


@lru_cache(maxsize=None)
def _amm_pool_validator() -> AMMPoolValidator:
    return AMMPoolValidator()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_book_offer(data: Dict[str, Any]) -> None:
    """
    Проверка offer из book_offers (кэшированный validator).

    Raises:
        jsonschema.ValidationError: offer не соответствует контракту
    """
    _book_offer_validator().validate(data)


def validate_amm_pool(data: Dict[str, Any]) -> None:
    """
    Проверка объекта amm из amm_info (кэшированный validator).

    Raises:
        jsonschema.ValidationError: amm не соответствует контракту
    """
    _amm_pool_validator().validate(data)
