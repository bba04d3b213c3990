# jobboard/services/dataset.py
"""
Fallback dataset: a static JSON snapshot of jobs, loaded once at startup.

Accepted file shapes:

    [ {job}, {job}, ... ]
    { "version": "2025-01", "jobs": [ {job}, ... ] }

Each job may use camelCase or snake_case keys, Mongo-export ids/dates
(``{"$oid": ...}``, ``{"$date": ...}``), numeric ``salaryMin``/``salaryMax``
or a composite ``salary`` string. Everything is normalized into frozen
JobRecords; the dataset is never mutated or refreshed afterwards.
"""
import hashlib
import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from pydantic import ValidationError

from jobboard.schemas.jobs import JobRecord
from jobboard.services.normalize import (
    coerce_int, norm_employment_type, parse_datetime, parse_salary_range
)

log = logging.getLogger("jobs.dataset")

OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")

# Records without a usable timestamp sort oldest
_UNKNOWN_CREATED_AT = datetime(1970, 1, 1)


def is_valid_job_id(value: Any) -> bool:
    return isinstance(value, str) and bool(OBJECT_ID_RE.fullmatch(value))


def _first(obj: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in obj and obj[k] is not None:
            return obj[k]
    return None


def _unwrap(value: Any, key: str) -> Any:
    # {"$oid": "..."} / {"$date": "..."} from mongoexport
    if isinstance(value, dict) and key in value:
        return value[key]
    return value


def _fingerprint(obj: Dict[str, Any]) -> str:
    base = "|".join(_text(obj.get(k)) or "" for k in ("title", "company", "location"))
    return hashlib.sha1(base.encode("utf-8")).hexdigest()[:24]


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _skills(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    elif not isinstance(value, (list, tuple)):
        raise ValueError(f"skills must be a list or a comma-separated string, got {type(value).__name__}")
    return tuple(s for s in (_text(v) for v in value) if s)


def _salary(obj: Dict[str, Any]) -> Tuple[Optional[int], Optional[int], Optional[str]]:
    smin = coerce_int(_first(obj, "salaryMin", "salary_min"))
    smax = coerce_int(_first(obj, "salaryMax", "salary_max"))
    raw = obj.get("salary")
    text = None
    if isinstance(raw, dict):
        smin = smin if smin is not None else coerce_int(raw.get("min"))
        smax = smax if smax is not None else coerce_int(raw.get("max"))
    elif raw is not None:
        text = _text(raw)
        if smin is None and smax is None:
            smin, smax = parse_salary_range(text)
    return smin, smax, text


def _active(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() not in {"false", "0", "no", "closed"}
    return bool(value)


def record_from_raw(obj: Dict[str, Any]) -> JobRecord:
    """
    Normalize one raw job object into a JobRecord.
    Raises ValueError / ValidationError for unusable records (e.g. no title).
    """
    if not isinstance(obj, dict):
        raise ValueError("job entry must be an object")

    raw_id = _unwrap(_first(obj, "_id", "id"), "$oid")
    job_id = str(raw_id).lower() if is_valid_job_id(raw_id) else _fingerprint(obj)

    created = parse_datetime(_unwrap(_first(obj, "createdAt", "created_at", "postedAt", "posted_at"), "$date"))
    if created is None:
        log.warning("job %s has no usable createdAt; treating as oldest", job_id)
        created = _UNKNOWN_CREATED_AT

    smin, smax, salary_text = _salary(obj)

    return JobRecord(
        id=job_id,
        title=_text(obj.get("title")),
        description=_text(obj.get("description")),
        company=_text(obj.get("company")),
        location=_text(obj.get("location")),
        salary_min=smin,
        salary_max=smax,
        salary=salary_text,
        job_type=norm_employment_type(_first(obj, "jobType", "job_type", "employmentType", "type")),
        skills=_skills(obj.get("skills")),
        created_at=created,
        is_active=_active(_first(obj, "isActive", "is_active")),
    )


def records_from_raw(entries: Iterable[Any]) -> Tuple[JobRecord, ...]:
    """Normalize many entries; bad ones are skipped, duplicate ids keep the first."""
    out = []
    seen = set()
    for idx, obj in enumerate(entries):
        try:
            rec = record_from_raw(obj)
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            log.warning("skipping fallback job #%d: %s", idx, e)
            continue
        if rec.id in seen:
            log.warning("skipping fallback job #%d: duplicate id %s", idx, rec.id)
            continue
        seen.add(rec.id)
        out.append(rec)
    return tuple(out)


@dataclass(frozen=True)
class FallbackDataset:
    records: Tuple[JobRecord, ...] = ()
    version: Optional[str] = None
    source: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.source is not None

    def __len__(self) -> int:
        return len(self.records)


def read_job_entries(path) -> Tuple[list, Optional[str]]:
    """Raw entries and optional version from a snapshot file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        version = _text(data.get("version"))
        entries = data.get("jobs") or []
    else:
        version, entries = None, data
    if not isinstance(entries, list):
        raise ValueError("snapshot 'jobs' must be a list")
    return entries, version


def load_fallback_dataset(path) -> FallbackDataset:
    """
    Load the snapshot once. A missing or unreadable file gives an empty,
    unloaded dataset (requests then fail instead of degrading).
    """
    p = Path(path)
    if not p.exists():
        log.warning("Fallback dataset not found at %s; store failures will not degrade", p)
        return FallbackDataset()
    try:
        entries, version = read_job_entries(p)
    except (OSError, ValueError) as e:
        log.error("Fallback dataset at %s unreadable: %s", p, e)
        return FallbackDataset()

    records = records_from_raw(entries)
    log.info("Fallback dataset loaded: %d jobs (version=%s) from %s", len(records), version, p)
    return FallbackDataset(records=records, version=version, source=str(p))
