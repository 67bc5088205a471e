# salesboard/services/ingestor.py

import math
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

import pandas as pd

from salesboard.api.schemas.schemas import SalesRecordCreate
from salesboard.core.errors import FileReadFailure

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1000

# CSV header -> record field. Headers are matched exactly.
COLUMN_MAP = {
    "ItemName": "item_name",
    "Category": "category",
    "Sales": "units_sold",
    "Revenue": "revenue",
}
NUMERIC_FIELDS = ("units_sold", "revenue")


def read_rows(path) -> Iterator[Dict[str, str]]:
    """
    Lazily yield one {header: value} mapping per data row of a CSV file.

    Single pass, not restartable. The file is deleted once the generator
    finishes, whether it ran to the end, failed, or was closed early.
    """
    path = Path(path)
    try:
        try:
            reader = pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                chunksize=CHUNK_SIZE,
            )
        except pd.errors.EmptyDataError:
            return
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
            raise FileReadFailure(path, e) from e

        with reader:
            try:
                for chunk in reader:
                    for row in chunk.to_dict(orient="records"):
                        yield row
            except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
                raise FileReadFailure(path, e) from e
    finally:
        path.unlink(missing_ok=True)


def _clean(value) -> Optional[str]:
    # short rows come back as NaN even with keep_default_na=False
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if value == "":
        return None
    return value


def to_record(row: Dict[str, str], source=None, line=None) -> SalesRecordCreate:
    fields = {field: _clean(row.get(header)) for header, field in COLUMN_MAP.items()}

    for field in NUMERIC_FIELDS:
        raw = fields[field]
        if raw is None:
            continue
        number = pd.to_numeric(raw, errors="coerce")
        # "inf" and overflowing values like "1e400" parse to infinity
        if pd.isna(number) or not math.isfinite(number):
            logger.warning("%s line %s: %r is not a finite number, storing NULL for %s",
                           source, line, raw, field)
            fields[field] = None
        else:
            fields[field] = float(number)

    return SalesRecordCreate(**fields)


def parse_file(path) -> List[SalesRecordCreate]:
    name = Path(path).name
    # line 1 is the header row
    records = [to_record(row, source=name, line=i) for i, row in enumerate(read_rows(path), start=2)]
    logger.info("Parsed %d rows from %s", len(records), name)
    return records


def parse_batch(paths: Iterable) -> List[SalesRecordCreate]:
    """Parse every file of an upload into one combined list, in file order."""
    records: List[SalesRecordCreate] = []
    for path in paths:
        records.extend(parse_file(path))
    return records
