"""Builders for the CSV and Excel user exports."""

from __future__ import annotations

from dataclasses import dataclass
import importlib
from io import BytesIO, StringIO
from typing import Any, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from user_accounts.domain.entities import User
from user_accounts.utils import now_utc

CSV_FORMAT = "csv"
EXCEL_FORMAT = "xlsx"
EXPORT_FORMATS = (CSV_FORMAT, EXCEL_FORMAT)

_CSV_CONTENT_TYPE = "text/csv"
_EXCEL_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)
_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
_STATUS_COLUMN = 4

EXPORT_COLUMNS = ("Email", "Username", "Role", "Status", "Created At", "Last Login")


@dataclass(frozen=True)
class ExportFile:
    """Content of a generated export ready to be downloaded."""

    filename: str
    content_type: str
    content: bytes
    row_count: int


def _get_pandas_module() -> Any:
    """Load :mod:`pandas` lazily; only the CSV export needs it."""

    return importlib.import_module("pandas")


def _format_timestamp(value) -> str:
    return value.strftime(_TIMESTAMP_FORMAT) if value else "Never"


def export_row(user: User) -> list[str]:
    """Return the cells written for ``user`` in both formats."""

    return [
        user.user_id,
        user.username,
        user.role.value,
        "Active" if user.is_active else "Inactive",
        _format_timestamp(user.created_at),
        _format_timestamp(user.last_login_at),
    ]


def export_filename(file_format: str) -> str:
    return f"users_export_{now_utc():%Y%m%d_%H%M%S}.{file_format}"


def build_csv_export(users: Sequence[User]) -> ExportFile:
    pandas = _get_pandas_module()
    dataframe = pandas.DataFrame([export_row(user) for user in users], columns=list(EXPORT_COLUMNS))
    buffer = StringIO()
    dataframe.to_csv(buffer, index=False)
    return ExportFile(
        filename=export_filename(CSV_FORMAT),
        content_type=_CSV_CONTENT_TYPE,
        content=buffer.getvalue().encode("utf-8"),
        row_count=len(users),
    )


def _create_workbook(users: Sequence[User]) -> Workbook:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Users"

    worksheet.append(list(EXPORT_COLUMNS))
    header_fill = PatternFill(fill_type="solid", fgColor="4F81BD")
    header_font = Font(color="FFFFFFFF", bold=True)
    header_alignment = Alignment(horizontal="center", vertical="center")
    for cell in worksheet[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_alignment

    active_font = Font(color="FF008000")
    inactive_font = Font(color="FFFF0000")
    for user in users:
        worksheet.append(export_row(user))
        status_cell = worksheet.cell(row=worksheet.max_row, column=_STATUS_COLUMN)
        status_cell.font = active_font if user.is_active else inactive_font

    for index, column_cells in enumerate(worksheet.columns, start=1):
        width = max(len(str(cell.value or "")) for cell in column_cells)
        worksheet.column_dimensions[get_column_letter(index)].width = width + 2

    worksheet.auto_filter.ref = worksheet.dimensions
    worksheet.freeze_panes = "A2"
    return workbook


def build_excel_export(users: Sequence[User]) -> ExportFile:
    workbook = _create_workbook(users)
    buffer = BytesIO()
    workbook.save(buffer)
    return ExportFile(
        filename=export_filename(EXCEL_FORMAT),
        content_type=_EXCEL_CONTENT_TYPE,
        content=buffer.getvalue(),
        row_count=len(users),
    )


def build_export(users: Sequence[User], file_format: str) -> ExportFile:
    """Render ``users`` as ``file_format`` (``csv`` or ``xlsx``)."""

    if file_format == CSV_FORMAT:
        return build_csv_export(users)
    if file_format == EXCEL_FORMAT:
        return build_excel_export(users)
    raise ValueError(f"Unsupported export format: {file_format}")


__all__ = [
    "CSV_FORMAT",
    "EXCEL_FORMAT",
    "EXPORT_COLUMNS",
    "EXPORT_FORMATS",
    "ExportFile",
    "build_export",
    "export_row",
]
