"""Tests for the job conversion pipeline and built-in hooks."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from sheetdoc.config import ConversionJob, SheetJob
from sheetdoc.core.errors import ConversionError
from sheetdoc.services.convert import convert_job, dump_documents


def _job(workbook: Path, out_dir: Path, **overrides) -> ConversionJob:
    payload = {
        "workbook": workbook,
        "sheets": [SheetJob(name="user0"), SheetJob(name="product0", output="nested/products.json")],
        "output_dir": out_dir,
    }
    payload.update(overrides)
    return ConversionJob(**payload)


def test_convert_job_writes_one_file_per_sheet(tmp_path, make_workbook, users_products) -> None:
    job = _job(make_workbook(users_products), tmp_path / "out")

    result = convert_job(job)

    assert [item.sheet for item in result.sheets] == ["user0", "product0"]
    assert result.total_rows == 7
    users = json.loads((tmp_path / "out" / "user0.json").read_text(encoding="utf-8"))
    assert users[0]["products"] == [{"user_id": 1, "name": "kettle"}, {"user_id": 1, "name": "teapot"}]
    products = json.loads((tmp_path / "out" / "nested" / "products.json").read_text(encoding="utf-8"))
    assert len(products) == 4


def test_convert_job_reports_failing_sheet(tmp_path, make_workbook, users_products) -> None:
    sheets = dict(users_products)
    sheets["product0"] = [["t"], ["user_id,int64", "name,string"], [1, None]]
    job = _job(make_workbook(sheets), tmp_path / "out")

    with pytest.raises(ConversionError) as excinfo:
        convert_job(job)

    assert excinfo.value.sheet == "product0"
    assert not (tmp_path / "out" / "user0.json").exists()


def test_convert_job_missing_workbook(tmp_path) -> None:
    with pytest.raises(ConversionError, match="not found"):
        convert_job(_job(tmp_path / "missing.xlsx", tmp_path / "out"))


def test_file_root_hook(tmp_path, make_workbook) -> None:
    assets = tmp_path / "assets"
    (assets / "img").mkdir(parents=True)
    (assets / "img" / "1.png").write_bytes(b"png")
    sheets = {"pics": [["t"], ["id,int64", "src,file"], [1, "img/1.png"]]}
    workbook = make_workbook(sheets)
    job = ConversionJob(workbook=workbook, sheets=["pics"], output_dir=tmp_path / "out", file_root=assets)

    convert_job(job)

    assert json.loads((tmp_path / "out" / "pics.json").read_text(encoding="utf-8")) == [
        {"id": 1, "src": "img/1.png"}
    ]

    missing = make_workbook({"pics": [["t"], ["id,int64", "src,file"], [1, "img/2.png"]]}, name="missing.xlsx")
    job = ConversionJob(workbook=missing, sheets=["pics"], output_dir=tmp_path / "out2", file_root=assets)
    with pytest.raises(ConversionError, match="not found"):
        convert_job(job)


def test_time_formats(tmp_path, make_workbook) -> None:
    when = datetime(2024, 5, 10, 9, 15)
    workbook = make_workbook({"events": [["t"], ["id,int64", "at,time"], [1, when]]})

    for time_format in ("iso", "epoch", "keep"):
        out_dir = tmp_path / time_format
        convert_job(ConversionJob(workbook=workbook, sheets=["events"], output_dir=out_dir, time_format=time_format))
        value = json.loads((out_dir / "events.json").read_text(encoding="utf-8"))[0]["at"]
        expected = when.astimezone()
        if time_format == "epoch":
            assert value == int(expected.timestamp())
        else:
            assert value == expected.isoformat()


def test_dump_documents_keeps_unicode() -> None:
    text = dump_documents([{"name": "茶壶"}], indent=None)

    assert text == '[{"name": "茶壶"}]'
