"""Airport reference data access."""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

import airportsdata
import pandas as pd

from .errors import ReferenceDataDecodeError, ReferenceDataIOError, ReferenceDataParseError

REFERENCE_COLUMNS = ["name", "abbreviation", "latitude", "longitude", "id"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AirportRecord:
    """One reference airport.

    ``id`` is the identifier carried by the source data. It is not the
    record's position in the loaded sequence, which is what the finders
    return.
    """
    name: str
    abbreviation: str
    latitude: float
    longitude: float
    id: int


def _is_blank(fields: Sequence) -> bool:
    return all(not (isinstance(value, str) and value.strip()) for value in fields)


def _decode_row(row: int, fields: Sequence) -> AirportRecord:
    name, abbreviation, lat_text, long_text, id_text = fields
    for column, value in zip(REFERENCE_COLUMNS[2:], (lat_text, long_text, id_text)):
        if not isinstance(value, str) or not value.strip():
            raise ReferenceDataDecodeError(f"row {row}: missing {column}", row=row)
    try:
        latitude = float(lat_text)
        longitude = float(long_text)
        airport_id = int(id_text)
    except ValueError as exc:
        raise ReferenceDataDecodeError(f"row {row}: {exc}", row=row) from exc
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ReferenceDataDecodeError(
            f"row {row}: coordinates must be finite, got ({lat_text}, {long_text})", row=row
        )
    if airport_id < 0:
        raise ReferenceDataDecodeError(f"row {row}: id must be non-negative, got {airport_id}", row=row)
    return AirportRecord(name, abbreviation, latitude, longitude, airport_id)


def load_airports(path: Union[str, Path]) -> List[AirportRecord]:
    """Load the reference file at ``path``, skipping its header row.

    Rows are returned in file order. Any row that does not decode into
    (name, abbreviation, latitude, longitude, id) aborts the load. Blank
    lines are ignored. ``row`` on errors is the 1-based line in the file.
    """
    path = Path(path)
    try:
        df = pd.read_csv(path, header=None, dtype=str, keep_default_na=False, skip_blank_lines=False)
    except pd.errors.EmptyDataError:
        logger.warning("Reference file %s is empty", path)
        return []
    except pd.errors.ParserError as exc:
        match = re.search(r"line (\d+)", str(exc))
        raise ReferenceDataParseError(
            f"Could not parse airport reference file {path}: {exc}",
            row=int(match.group(1)) if match else None,
        ) from exc
    except UnicodeDecodeError as exc:
        raise ReferenceDataParseError(f"Could not decode airport reference file {path}: {exc}") from exc
    except OSError as exc:
        raise ReferenceDataIOError(f"Could not open airport reference file {path}: {exc}") from exc

    if df.shape[1] != len(REFERENCE_COLUMNS):
        raise ReferenceDataParseError(
            f"Airport reference file {path} has {df.shape[1]} fields per row, "
            f"expected {len(REFERENCE_COLUMNS)}",
            row=1,
        )

    airports = [
        _decode_row(line, fields)
        for line, fields in enumerate(df.iloc[1:].itertuples(index=False, name=None), 2)
        if not _is_blank(fields)
    ]
    logger.info("Loaded %s airports from %s", len(airports), path)
    return airports


def records_from_airportsdata(code_type: str = "IATA", country: Optional[str] = None) -> List[AirportRecord]:
    """Build a reference sequence from the bundled ``airportsdata`` tables.

    Records are ordered by code and numbered by that order.
    """
    table = airportsdata.load(code_type)
    if country:
        table = {k: v for k, v in table.items() if v.get("country") == country}
    return [
        AirportRecord(data["name"], code, float(data["lat"]), float(data["lon"]), airport_id)
        for airport_id, (code, data) in enumerate(sorted(table.items()))
    ]


def write_reference_csv(records: Iterable[AirportRecord], path: Union[str, Path]) -> None:
    df = pd.DataFrame(
        [(a.name, a.abbreviation, a.latitude, a.longitude, a.id) for a in records],
        columns=REFERENCE_COLUMNS,
    )
    df.to_csv(path, index=False)
    logger.info("Wrote %s airports to %s", len(df), path)
