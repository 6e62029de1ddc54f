"""Export tests."""

import io
import json
import zipfile
import xml.etree.ElementTree as ET

import pandas as pd
import pytest

from src.generator import (
    ExportNotAllowed,
    build_export_file,
    export_csv_archive,
    export_results,
    generate,
    get_tier_limits,
    results_to_dataframe,
    split_into_chunks,
)
from src.models.generator import ExportFormat, GenerationConfig, TierLimits


@pytest.fixture()
def result():
    return generate([["a", "b"], ["1", "2"]], GenerationConfig(separator="-"), TierLimits(max_combinations=3))


@pytest.fixture()
def large_result():
    lists = [[str(i) for i in range(5)]] * 2
    return generate(lists, GenerationConfig(separator=""), TierLimits(max_combinations=100))


def test_export_txt(result):
    assert export_results(result, ExportFormat.TXT) == b"a-1\na-2\nb-1"


def test_export_csv(result):
    lines = export_results(result, "csv").decode("utf-8").splitlines()
    assert lines == ["combination", "a-1", "a-2", "b-1"]


def test_export_json(result):
    payload = json.loads(export_results(result, ExportFormat.JSON))
    assert payload == {
        "total_count": 4,
        "truncated": True,
        "truncated_at": 3,
        "items": ["a-1", "a-2", "b-1"],
    }


def test_export_json_keeps_unicode():
    result = generate([["café"], ["ñ"]], GenerationConfig(), TierLimits(max_combinations=10))
    payload = json.loads(export_results(result, ExportFormat.JSON).decode("utf-8"))
    assert payload["items"] == ["café ñ"]


def test_export_xlsx(result):
    content = export_results(result, ExportFormat.XLSX)
    assert content[:2] == b"PK"
    df = pd.read_excel(io.BytesIO(content), sheet_name="combinations", engine="openpyxl")
    assert df["combination"].tolist() == ["a-1", "a-2", "b-1"]


def test_export_xml(result):
    root = ET.fromstring(export_results(result, ExportFormat.XML))
    assert root.tag == "combinations"
    assert [row.find("combination").text for row in root.findall("row")] == ["a-1", "a-2", "b-1"]


def test_export_respects_plan(result):
    with pytest.raises(ExportNotAllowed) as exc_info:
        export_results(result, ExportFormat.CSV, get_tier_limits("free"))
    assert exc_info.value.format == "csv"

    assert export_results(result, ExportFormat.CSV, get_tier_limits("starter"))


@pytest.mark.parametrize("fmt", [ExportFormat.XLSX, ExportFormat.XML])
def test_spreadsheet_formats_need_enterprise(result, fmt):
    with pytest.raises(ExportNotAllowed):
        export_results(result, fmt, get_tier_limits("professional"))
    assert export_results(result, fmt, get_tier_limits("enterprise"))
    assert export_results(result, fmt, get_tier_limits("unlimited"))


def test_results_to_dataframe(result):
    df = results_to_dataframe(result)
    assert list(df.columns) == ["combination"]
    assert df["combination"].tolist() == result.items


def test_split_into_chunks():
    df = pd.DataFrame({"combination": [str(i) for i in range(25)]})
    chunks = split_into_chunks(df, chunk_size=10)
    assert [len(chunk) for chunk in chunks] == [10, 10, 5]
    assert chunks[2]["combination"].tolist() == ["20", "21", "22", "23", "24"]


def test_split_small_frame_is_single_chunk():
    df = pd.DataFrame({"combination": ["a"]})
    assert len(split_into_chunks(df)) == 1


def test_split_rejects_bad_chunk_size():
    with pytest.raises(ValueError):
        split_into_chunks(pd.DataFrame({"combination": ["a"]}), chunk_size=0)


def test_csv_archive_parts(large_result):
    content = export_csv_archive(large_result, "combos", chunk_size=10)
    with zipfile.ZipFile(io.BytesIO(content)) as archive:
        names = archive.namelist()
        assert names == [f"combos_part{i}.csv" for i in range(1, 4)]
        rows = []
        for name in names:
            rows.extend(archive.read(name).decode("utf-8").splitlines()[1:])
    assert rows == large_result.items


def test_build_export_file_small_csv(result):
    filename, media_type, content = build_export_file(result, "csv", "out", chunk_size=10)
    assert filename == "out.csv"
    assert media_type == "text/csv"
    assert content.decode("utf-8").splitlines()[0] == "combination"


def test_build_export_file_chunks_large_csv(large_result):
    filename, media_type, content = build_export_file(large_result, ExportFormat.CSV, "out", chunk_size=10)
    assert filename == "out.zip"
    assert media_type == "application/zip"
    with zipfile.ZipFile(io.BytesIO(content)) as archive:
        assert len(archive.namelist()) == 3


def test_build_export_file_chunked_csv_respects_plan(large_result):
    with pytest.raises(ExportNotAllowed):
        build_export_file(large_result, ExportFormat.CSV, "out", limits=get_tier_limits("free"), chunk_size=10)


def test_build_export_file_xlsx(result):
    filename, media_type, _ = build_export_file(result, ExportFormat.XLSX, "out")
    assert filename == "out.xlsx"
    assert media_type.endswith("spreadsheetml.sheet")
