"""
Record readers for interaction and product sources.
Every record of a source is validated before any of them reaches the engine.
"""

import math
import os
from typing import Any, List, Optional, Tuple

import pandas as pd

from common.constants import ID_PREFIXES, INGESTION, PATHS, PRODUCT_ROLE, USER_ROLE
from common.errors import IngestionError
from common.utils import describe_source, records_to_frame, safe_read_csv, setup_logging
from recommenders.data_models import ProductAttributes

logger = setup_logging(__name__, PATHS["app_log_file"])

# Line numbers are 1-based and the header occupies line 1
FIRST_DATA_ROW = 2

ProductRecord = Tuple[str, ProductAttributes, Optional[str]]


def read_source(source, delimiter: str = INGESTION["delimiter"]) -> pd.DataFrame:
    """
    Read a source into a string DataFrame with its header row consumed.

    Accepts a filesystem path, a readable text stream, a DataFrame, or an
    iterable of pre-parsed records whose first record is the header.
    """
    name = describe_source(source)
    if isinstance(source, pd.DataFrame):
        return source
    if isinstance(source, (str, os.PathLike)) or hasattr(source, "read"):
        try:
            return safe_read_csv(source, delimiter)
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except pd.errors.ParserError as e:
            raise IngestionError(name, None, str(e)) from e
    return records_to_frame(source)


def parse_interactions(df: pd.DataFrame, source_name: str) -> List[Tuple[str, str]]:
    """Validate interaction rows and namespace their ids. Returns (user_id, product_id) pairs."""
    required = INGESTION["interaction_min_fields"]
    _check_header(df, source_name, required)

    records = []
    for i, row in enumerate(df.itertuples(index=False, name=None)):
        line = i + FIRST_DATA_ROW
        fields = _present_fields(row, required, source_name, line)
        raw_user = _identifier(fields[0], "user id", source_name, line)
        raw_product = _identifier(fields[1], "product id", source_name, line)
        records.append((ID_PREFIXES[USER_ROLE] + raw_user, ID_PREFIXES[PRODUCT_ROLE] + raw_product))

    logger.debug(f"Parsed {len(records)} interaction records from {source_name}")
    return records


def parse_products(df: pd.DataFrame, source_name: str) -> List[ProductRecord]:
    """Validate product rows. Returns (product_id, attributes, display name or None)."""
    required = INGESTION["product_min_fields"]
    name_column = INGESTION["product_name_column"]
    _check_header(df, source_name, required)

    records = []
    for i, row in enumerate(df.itertuples(index=False, name=None)):
        line = i + FIRST_DATA_ROW
        fields = _present_fields(row, required, source_name, line)
        raw_product = _identifier(fields[0], "product id", source_name, line)
        attributes: ProductAttributes = {
            "category": str(fields[1]).strip(),
            "price_range": str(fields[2]).strip(),
            "brand": str(fields[3]).strip(),
        }
        display_name = None
        if len(row) > name_column and not _is_missing(row[name_column]):
            display_name = str(row[name_column]).strip() or None
        records.append((ID_PREFIXES[PRODUCT_ROLE] + raw_product, attributes, display_name))

    logger.debug(f"Parsed {len(records)} product records from {source_name}")
    return records


def _check_header(df: pd.DataFrame, source_name: str, required: int) -> None:
    if len(df) and df.shape[1] < required:
        raise IngestionError(source_name, 1, f"header has {df.shape[1]} fields, expected at least {required}")


def _present_fields(row: tuple, required: int, source_name: str, line: int) -> tuple:
    fields = row[:required]
    present = len(fields) - sum(1 for f in fields if _is_missing(f))
    if len(fields) < required or present < required:
        raise IngestionError(source_name, line, f"expected at least {required} fields, found {present}")
    return fields


def _identifier(value: Any, label: str, source_name: str, line: int) -> str:
    raw = str(value).strip()
    if not raw:
        raise IngestionError(source_name, line, f"empty {label}")
    return raw


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))
