"""CSV ingestion for the ODS registry extract and the directory export."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from ods_practices.common.config_loader import DirectoryDialect
from ods_practices.common.errors import MissingFieldError, SchemaError, SourceReadError
from ods_practices.common.logging import log_event
from ods_practices.common.models import DirectoryRecord, RegistryRecord


def _log_ingest(logger: logging.Logger | None, path: Path, rows_in: int, rows_out: int) -> None:
    if logger is None:
        return
    log_event(
        logger,
        f"parsed {rows_in} rows from {path.name}",
        stage="ingest",
        source=str(path),
        event="INGEST",
        status="ok",
        rows_in=rows_in,
        rows_out=rows_out,
    )
    if rows_out < rows_in:
        log_event(
            logger,
            f"{rows_in - rows_out} duplicate organisation codes collapsed in {path.name}",
            level=logging.WARNING,
            stage="ingest",
            source=str(path),
            event="DUPLICATE_CODES",
            status="warn",
        )


def parse_registry(
    path: Path,
    *,
    encoding: str | None = None,
    logger: logging.Logger | None = None,
) -> dict[str, RegistryRecord]:
    """Read a headerless ODS extract keyed by organisation code.

    Later rows replace earlier rows with the same code. ``encoding=None`` uses
    the process default text encoding.
    """
    records: dict[str, RegistryRecord] = {}
    rows_in = 0
    try:
        with path.open("r", encoding=encoding, newline="") as f:
            reader = csv.reader(f)
            for row in reader:
                if not row:
                    continue
                rows_in += 1
                try:
                    record = RegistryRecord.from_row(row)
                except SchemaError as exc:
                    raise SchemaError(f"{path}:{reader.line_num}: {exc}") from None
                records[record.organisation_code] = record
    except csv.Error as exc:
        raise SchemaError(f"Malformed CSV in registry file {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Cannot read registry file {path}: {exc}") from exc

    _log_ingest(logger, path, rows_in, len(records))
    return records


def parse_directory(
    path: Path,
    *,
    dialect: DirectoryDialect,
    logger: logging.Logger | None = None,
) -> dict[str, DirectoryRecord]:
    """Read the directory export keyed by its organisation code column.

    Quoting is switched off, so quote characters are ordinary field text.
    """
    records: dict[str, DirectoryRecord] = {}
    rows_in = 0
    try:
        with path.open("r", encoding=dialect.encoding, newline="") as f:
            reader = csv.reader(f, delimiter=dialect.delimiter, quoting=csv.QUOTE_NONE)
            header = next(reader, None)
            if header is None:
                raise SourceReadError(f"Directory file {path} has no header row")
            if dialect.code_field not in header:
                raise MissingFieldError(f"Directory file {path} has no {dialect.code_field!r} column")
            for row in reader:
                if not row:
                    continue
                rows_in += 1
                padded = row + [""] * (len(header) - len(row))
                record = DirectoryRecord(dict(zip(header, padded)))
                records[record.field(dialect.code_field)] = record
    except csv.Error as exc:
        raise SchemaError(f"Malformed CSV in directory file {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Cannot read directory file {path}: {exc}") from exc

    _log_ingest(logger, path, rows_in, len(records))
    return records
