"""Export generated results to downloadable formats."""

import io
import json
import zipfile
from typing import List, Optional, Tuple, Union

import pandas as pd

from src.generator.errors import ExportNotAllowed
from src.models.generator import ExportFormat, GenerationResult, TierLimits

MEDIA_TYPES = {
    ExportFormat.TXT: "text/plain",
    ExportFormat.CSV: "text/csv",
    ExportFormat.JSON: "application/json",
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.XML: "application/xml",
}

ZIP_MEDIA_TYPE = "application/zip"

# Rows per CSV file before output is split into parts
DEFAULT_CHUNK_SIZE = 10000


def results_to_dataframe(result: GenerationResult) -> pd.DataFrame:
    """
    Build a DataFrame with one row per result.

    Args:
        result: Generation result

    Returns:
        DataFrame with a single 'combination' column
    """
    return pd.DataFrame({"combination": result.items})


def split_into_chunks(df: pd.DataFrame, chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[pd.DataFrame]:
    """
    Split result rows into consecutive parts of at most chunk_size rows.

    An empty frame yields a single empty part so a file is still produced.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")
    if len(df) <= chunk_size:
        return [df]
    return [df.iloc[start:start + chunk_size] for start in range(0, len(df), chunk_size)]


def export_results(
    result: GenerationResult,
    fmt: Union[ExportFormat, str],
    limits: Optional[TierLimits] = None
) -> bytes:
    """
    Render a result in the requested format.

    Args:
        result: Generation result
        fmt: Export format
        limits: If given, the format must be in limits.allowed_exports

    Returns:
        File content (UTF-8 for text formats)

    Raises:
        ExportNotAllowed: Format not available on the plan
    """
    fmt = ExportFormat(fmt)
    if limits is not None and fmt not in limits.allowed_exports:
        raise ExportNotAllowed(fmt.value)

    if fmt == ExportFormat.CSV:
        return results_to_dataframe(result).to_csv(index=False).encode("utf-8")

    if fmt == ExportFormat.XLSX:
        buffer = io.BytesIO()
        results_to_dataframe(result).to_excel(
            buffer, index=False, sheet_name="combinations", engine="openpyxl"
        )
        return buffer.getvalue()

    if fmt == ExportFormat.XML:
        xml = results_to_dataframe(result).to_xml(
            index=False, root_name="combinations", row_name="row", parser="etree"
        )
        return xml.encode("utf-8")

    if fmt == ExportFormat.JSON:
        payload = {
            "total_count": result.total_count,
            "truncated": result.truncated,
            "truncated_at": result.truncated_at,
            "items": result.items,
        }
        return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")

    return "\n".join(result.items).encode("utf-8")


def export_csv_archive(
    result: GenerationResult,
    filename_prefix: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> bytes:
    """
    Write results as numbered CSV parts inside a zip archive.

    Parts are named {filename_prefix}_part{n}.csv, starting at 1.
    """
    buffer = io.BytesIO()
    chunks = split_into_chunks(results_to_dataframe(result), chunk_size)
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for i, chunk in enumerate(chunks):
            archive.writestr(f"{filename_prefix}_part{i + 1}.csv", chunk.to_csv(index=False))
    return buffer.getvalue()


def build_export_file(
    result: GenerationResult,
    fmt: Union[ExportFormat, str],
    filename_base: str,
    limits: Optional[TierLimits] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Tuple[str, str, bytes]:
    """
    Produce a downloadable file for a result.

    CSV output with more than chunk_size rows is split into parts and
    returned as a zip archive.

    Args:
        result: Generation result
        fmt: Export format
        filename_base: Filename without extension
        limits: If given, the format must be in limits.allowed_exports
        chunk_size: Maximum rows per CSV file

    Returns:
        Tuple of (filename, media_type, content)
    """
    fmt = ExportFormat(fmt)
    if fmt == ExportFormat.CSV and len(result.items) > chunk_size:
        if limits is not None and fmt not in limits.allowed_exports:
            raise ExportNotAllowed(fmt.value)
        return (
            f"{filename_base}.zip",
            ZIP_MEDIA_TYPE,
            export_csv_archive(result, filename_base, chunk_size),
        )

    content = export_results(result, fmt, limits)
    return f"{filename_base}.{fmt.value}", MEDIA_TYPES[fmt], content
