"""Country-keyed dataset reader for MetricGraph.

Parses a delimited text file into an ordered list of MetricRecord. The first
line is always treated as a header and skipped. Any malformed row aborts the
read with a DatasetParseError carrying the 1-based line number.
"""

from __future__ import annotations

import csv
import logging
import math
from pathlib import Path
from typing import List, Optional

from config.defaults import DATASET_DELIMITER
from metricgraph.errors import DatasetNotFoundError, DatasetParseError
from metricgraph.models.metrics import MetricRecord

logger = logging.getLogger(__name__)


def read_dataset(
    path: str | Path,
    value_column: int = 1,
    expected_fields: Optional[int] = None,
    delimiter: str = DATASET_DELIMITER,
) -> List[MetricRecord]:
    """Read (country, value) pairs from a delimited file.

    Column 0 holds the country name; ``value_column`` selects the numeric
    column. Blank lines are ignored. File order is preserved and duplicate
    countries are kept as separate records.

    Args:
        path: Dataset file path.
        value_column: Zero-based index of the numeric column.
        expected_fields: Exact number of fields every data row must have, or
            None to only require that ``value_column`` exists.
        delimiter: Field delimiter.

    Returns:
        List of MetricRecord in file order.

    Raises:
        DatasetNotFoundError: If the file does not exist.
        DatasetParseError: On a row with the wrong number of fields, or a
            value that is not a finite number, or on bytes that are not
            valid UTF-8.
    """
    path = Path(path)
    if not path.is_file():
        raise DatasetNotFoundError(str(path))

    min_fields = expected_fields if expected_fields is not None else value_column + 1
    records: List[MetricRecord] = []

    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f, delimiter=delimiter)
        try:
            for row_index, row in enumerate(reader):
                if row_index == 0:
                    continue
                if not row or all(not cell.strip() for cell in row):
                    continue
                records.append(
                    _parse_row(row, reader.line_num, path, value_column, expected_fields, min_fields)
                )
        except csv.Error as exc:
            raise DatasetParseError(str(path), reader.line_num, f"malformed row: {exc}") from exc
        except UnicodeDecodeError as exc:
            # Decoding runs ahead of the csv reader, so the line is approximate
            raise DatasetParseError(str(path), reader.line_num + 1, f"invalid UTF-8: {exc}") from exc

    logger.debug("Read %d records from %s", len(records), path)
    return records


def _parse_row(
    row: List[str],
    line: int,
    path: Path,
    value_column: int,
    expected_fields: Optional[int],
    min_fields: int,
) -> MetricRecord:
    if expected_fields is not None and len(row) != expected_fields:
        raise DatasetParseError(
            str(path), line, f"expected {expected_fields} fields, found {len(row)}"
        )
    if len(row) < min_fields:
        raise DatasetParseError(
            str(path), line, f"expected at least {min_fields} fields, found {len(row)}"
        )

    country = row[0].strip()
    if not country:
        raise DatasetParseError(str(path), line, "empty country name")

    raw_value = row[value_column].strip()
    try:
        value = float(raw_value)
    except ValueError:
        raise DatasetParseError(
            str(path), line, f"invalid numeric value {raw_value!r} in column {value_column}"
        ) from None
    if not math.isfinite(value):
        raise DatasetParseError(str(path), line, f"non-finite value {raw_value!r}")

    return MetricRecord(country=country, value=value)
