import logging
import os
import re
import shutil
import tempfile
import zipfile
from pathlib import Path

import chardet
import pandas as pd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from sqlalchemy import String, func, insert, literal, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.constants import DEFAULT_BRAND, DEFAULT_CATEGORY, DEFAULT_STOCK, DEFAULT_UNIT
from app.core.dates import utc_now
from app.core.errors import NoFileProvided, ValidationError
from app.models.product import Product
from app.schemas.imports import ImportReport
from app.services.product_service import resolve_status

logger = logging.getLogger(__name__)

WORKBOOK_SUFFIXES = (".xlsx",)
_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def _clean_text(value):
    if _is_blank(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or None


def normalize_header(value):
    if value is None:
        return ""
    value_text = str(value).replace("\ufeff", "").strip().lower()
    return value_text


def parse_stock(value):
    """Integer stock from a cell, DEFAULT_STOCK when it cannot be read.

    Accepts integers, integral floats ("10.0") and a leading integer followed
    by text ("12 pcs").
    """
    if _is_blank(value) or isinstance(value, bool):
        return DEFAULT_STOCK
    if isinstance(value, int):
        return value
    value_text = str(value).strip()
    try:
        return int(value_text)
    except ValueError:
        pass
    try:
        return int(float(value_text))
    except (ValueError, OverflowError):
        pass
    match = _LEADING_INTEGER.match(value_text)
    if match:
        return int(match.group(1))
    return DEFAULT_STOCK


def _detect_encoding(path):
    with open(path, "rb") as handle:
        raw = handle.read()
    result = chardet.detect(raw) if raw else {}
    return result.get("encoding") or "utf-8"


def read_csv_rows(path):
    try:
        frame = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            encoding=_detect_encoding(path),
        )
    except pd.errors.EmptyDataError:
        return []
    frame.columns = [normalize_header(column) for column in frame.columns]
    return frame.to_dict(orient="records")


def read_workbook_rows(path):
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        worksheet = workbook.active
        rows_iter = worksheet.iter_rows(values_only=True)
        headers = next(rows_iter, None)
        if not headers:
            return []
        indices = [
            (idx, key)
            for idx, key in enumerate(normalize_header(header) for header in headers)
            if key
        ]
        rows = []
        for row in rows_iter:
            if row is None or all(_is_blank(value) for value in row):
                continue
            rows.append(
                {key: _clean_text(row[idx]) if idx < len(row) else None for idx, key in indices}
            )
        return rows
    finally:
        workbook.close()


def load_rows(path):
    path = Path(path)
    try:
        if path.suffix.lower() in WORKBOOK_SUFFIXES:
            return read_workbook_rows(path)
        return read_csv_rows(path)
    except (
        pd.errors.ParserError,
        UnicodeDecodeError,
        LookupError,
        InvalidFileException,
        zipfile.BadZipFile,
    ) as exc:
        raise ValidationError(f"Unable to parse import file: {exc}") from exc


def build_product_values(row):
    stock = parse_stock(row.get("stock"))
    return {
        "name": _clean_text(row.get("name")),
        "unit": _clean_text(row.get("unit")) or DEFAULT_UNIT,
        "category": _clean_text(row.get("category")) or DEFAULT_CATEGORY,
        "brand": _clean_text(row.get("brand")) or DEFAULT_BRAND,
        "stock": stock,
        "status": resolve_status(stock, _clean_text(row.get("status"))),
        "image": _clean_text(row.get("image")) or get_settings().PLACEHOLDER_IMAGE_URL,
    }


def insert_if_absent(db: Session, values) -> bool:
    """Insert a product unless one with the same name (ignoring case) exists.

    A single INSERT ... SELECT ... WHERE NOT EXISTS statement, so the check
    and the write cannot interleave with another import.
    """
    table = Product.__table__
    now = utc_now()
    row = dict(values, created_at=now, updated_at=now)
    columns = list(row)

    name_param = literal(values["name"], type_=String())
    existing = (
        select(table.c.id)
        .where(func.lower(table.c.name) == func.lower(name_param))
        .correlate(None)
    )
    candidate = select(
        *[literal(row[column], type_=table.c[column].type) for column in columns]
    ).where(~existing.exists())

    result = db.execute(insert(table).from_select(columns, candidate))
    return result.rowcount > 0


def find_id_by_name(db: Session, name):
    return (
        db.execute(
            select(Product.id)
            .where(func.lower(Product.name) == func.lower(name))
            .order_by(Product.id)
            .limit(1)
        )
        .scalars()
        .first()
    )


def import_rows(db: Session, rows) -> ImportReport:
    report = ImportReport()
    for index, row in enumerate(rows, start=1):
        values = build_product_values(row)
        try:
            inserted = insert_if_absent(db, values)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            report.skipped += 1
            logger.warning("Import row %s rejected: %s", index, getattr(exc, "orig", None) or exc)
            continue

        if inserted:
            report.added += 1
            continue

        existing_id = find_id_by_name(db, values["name"])
        if existing_id is None:
            # removed between the check and the lookup
            report.skipped += 1
            continue
        report.add_duplicate(values["name"], existing_id)

    logger.info(
        "Import finished: %s added, %s skipped, %s duplicates",
        report.added,
        report.skipped,
        len(report.duplicates),
    )
    return report


def import_products(db: Session, path) -> ImportReport:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return import_rows(db, load_rows(path))


def _upload_dir():
    upload_dir = get_settings().UPLOAD_DIR
    if not upload_dir:
        return None
    path = Path(upload_dir)
    path.mkdir(parents=True, exist_ok=True)
    return str(path)


def spool_upload(upload) -> Path:
    suffix = Path(upload.filename or "").suffix.lower()
    fd, tmp_name = tempfile.mkstemp(prefix="import_", suffix=suffix, dir=_upload_dir())
    try:
        with os.fdopen(fd, "wb") as handle:
            shutil.copyfileobj(upload.file, handle)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return Path(tmp_name)


def import_upload(db: Session, upload) -> ImportReport:
    """Import an uploaded file (anything with ``filename`` and ``file``).

    The upload is written to a temporary file, which is deleted as soon as
    parsing finishes or fails.
    """
    if upload is None or not getattr(upload, "filename", None):
        raise NoFileProvided()

    tmp_path = spool_upload(upload)
    try:
        rows = load_rows(tmp_path)
    finally:
        tmp_path.unlink(missing_ok=True)

    logger.info(
        "Parsed %s rows from %s",
        len(rows),
        upload.filename,
        extra={"upload": upload.filename},
    )
    return import_rows(db, rows)


__all__ = [
    "build_product_values",
    "import_products",
    "import_rows",
    "import_upload",
    "insert_if_absent",
    "load_rows",
    "parse_stock",
]
