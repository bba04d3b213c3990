import json
from datetime import datetime

import pytest

from jobboard.services.dataset import (
    is_valid_job_id, load_fallback_dataset, record_from_raw, records_from_raw
)


def test_record_from_camel_case_job():
    rec = record_from_raw({
        "_id": "AAAAAAAAAAAAAAAAAAAAAA01",
        "title": "  Backend Engineer ",
        "company": "Acme",
        "salaryMin": "80,000",
        "salaryMax": 100000,
        "jobType": "Full Time",
        "skills": ["Python", " ", "SQL"],
        "createdAt": "2025-01-10T10:00:00Z",
    })
    assert rec.id == "aaaaaaaaaaaaaaaaaaaaaa01"
    assert rec.title == "Backend Engineer"
    assert rec.salary_min == 80000
    assert rec.salary_max == 100000
    assert rec.job_type == "full-time"
    assert rec.skills == ("Python", "SQL")
    assert rec.created_at == datetime(2025, 1, 10, 10, 0)
    assert rec.is_active is True


def test_record_from_mongo_export():
    rec = record_from_raw({
        "_id": {"$oid": "665a1f0c9b1e8a0012a4c101"},
        "title": "DevOps Engineer",
        "created_at": {"$date": "2025-05-24T11:45:00Z"},
        "is_active": "false",
        "skills": "AWS, Kubernetes",
    })
    assert rec.id == "665a1f0c9b1e8a0012a4c101"
    assert rec.created_at == datetime(2025, 5, 24, 11, 45)
    assert rec.is_active is False
    assert rec.skills == ("AWS", "Kubernetes")


def test_salary_string_is_parsed_but_kept_for_display():
    rec = record_from_raw({"_id": "a" * 24, "title": "x", "salary": "$60k - $80k", "createdAt": "2025-01-01"})
    assert (rec.salary_min, rec.salary_max) == (60000, 80000)
    assert rec.salary == "$60k - $80k"


def test_explicit_salary_numbers_win_over_string():
    rec = record_from_raw({"_id": "a" * 24, "title": "x", "salaryMax": 5, "salary": "10-20",
                           "createdAt": "2025-01-01"})
    assert (rec.salary_min, rec.salary_max) == (None, 5)


def test_salary_object():
    rec = record_from_raw({"_id": "a" * 24, "title": "x", "salary": {"min": 1, "max": 2}, "createdAt": "2025-01-01"})
    assert (rec.salary_min, rec.salary_max) == (1, 2)
    assert rec.salary is None


def test_missing_id_gets_stable_fingerprint():
    a = record_from_raw({"title": "QA", "company": "Acme", "createdAt": "2025-01-01"})
    b = record_from_raw({"title": "QA", "company": "Acme", "createdAt": "2024-01-01"})
    assert a.id == b.id
    assert is_valid_job_id(a.id)


def test_missing_created_at_sorts_oldest():
    rec = record_from_raw({"_id": "a" * 24, "title": "x"})
    assert rec.created_at == datetime(1970, 1, 1)


def test_unknown_job_type_is_dropped():
    rec = record_from_raw({"_id": "a" * 24, "title": "x", "jobType": "gig", "createdAt": "2025-01-01"})
    assert rec.job_type is None


def test_records_from_raw_skips_bad_and_duplicate_entries():
    records = records_from_raw([
        {"_id": "a" * 24, "title": "first", "createdAt": "2025-01-01"},
        {"_id": "A" * 24, "title": "duplicate", "createdAt": "2025-01-01"},
        {"_id": "b" * 24, "createdAt": "2025-01-01"},  # no title
        "not an object",
        {"_id": "c" * 24, "title": "second", "createdAt": "2025-01-01"},
    ])
    assert [r.title for r in records] == ["first", "second"]


def test_non_string_fields_do_not_abort_loading():
    records = records_from_raw([
        {"title": "ok", "createdAt": "2025-01-01"},
        {"title": "X", "company": 5, "location": 12.5},
        {"title": "Y", "skills": 5},  # not a list or string
        {"title": "Z", "skills": ["Go", 7, None]},
    ])
    assert [r.title for r in records] == ["ok", "X", "Z"]
    assert records[1].company == "5"
    assert is_valid_job_id(records[1].id)
    assert records[2].skills == ("Go", "7")


def test_scalar_skills_are_rejected():
    with pytest.raises(ValueError):
        record_from_raw({"_id": "a" * 24, "title": "Y", "skills": 5})


@pytest.mark.parametrize("value,ok", [
    ("665a1f0c9b1e8a0012a4c101", True),
    ("665A1F0C9B1E8A0012A4C101", True),
    ("665a1f0c9b1e8a0012a4c10", False),
    ("665a1f0c9b1e8a0012a4c1011", False),
    ("665a1f0c9b1e8a0012a4c10g", False),
    ("665a1f0c9b1e8a0012a4c101\n", False),
    ("", False),
    (None, False),
    (12345, False),
])
def test_is_valid_job_id(value, ok):
    assert is_valid_job_id(value) is ok


# ---------------------------
# Loading
# ---------------------------
def test_load_versioned_snapshot(tmp_path):
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps({
        "version": "v7",
        "jobs": [{"_id": "a" * 24, "title": "x", "createdAt": "2025-01-01"}],
    }), encoding="utf-8")

    ds = load_fallback_dataset(path)

    assert ds.loaded
    assert ds.version == "v7"
    assert len(ds) == 1


def test_load_bare_list(tmp_path):
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps([{"_id": "a" * 24, "title": "x", "createdAt": "2025-01-01"}]), encoding="utf-8")
    ds = load_fallback_dataset(path)
    assert ds.loaded
    assert ds.version is None
    assert len(ds) == 1


def test_load_skips_mistyped_entries(tmp_path):
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps([
        {"_id": "a" * 24, "title": "x", "createdAt": "2025-01-01"},
        {"title": "X", "company": 5},
        {"title": "Y", "skills": {"lang": "go"}},
    ]), encoding="utf-8")

    ds = load_fallback_dataset(path)

    assert ds.loaded
    assert [r.title for r in ds.records] == ["x", "X"]


def test_missing_file_gives_unloaded_dataset(tmp_path):
    ds = load_fallback_dataset(tmp_path / "nope.json")
    assert not ds.loaded
    assert len(ds) == 0


@pytest.mark.parametrize("content", ["{not json", '{"jobs": {"a": 1}}'])
def test_unreadable_file_gives_unloaded_dataset(tmp_path, content):
    path = tmp_path / "jobs.json"
    path.write_text(content, encoding="utf-8")
    assert not load_fallback_dataset(path).loaded


def test_empty_snapshot_is_still_loaded(tmp_path):
    path = tmp_path / "jobs.json"
    path.write_text("[]", encoding="utf-8")
    ds = load_fallback_dataset(path)
    assert ds.loaded
    assert len(ds) == 0


def test_bundled_snapshot_loads():
    from jobboard.config import FALLBACK_JOBS_PATH

    ds = load_fallback_dataset(FALLBACK_JOBS_PATH)
    assert ds.loaded
    assert ds.version == "2025-06-01"
    assert len(ds) == 10
    assert sum(1 for r in ds.records if r.is_active) == 9
