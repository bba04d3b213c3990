# jobboard/scripts/import_jobs_json_to_db.py
"""
Seed the structured store from a JSON snapshot (same format as the
fallback dataset). Existing ids are replaced, so re-running is safe.

    python -m jobboard.scripts.import_jobs_json_to_db [path]
"""
import logging
import os
import sys
from typing import Iterable

from sqlalchemy.orm import Session

from jobboard.models import Job, JobSkill
from jobboard.schemas.jobs import JobRecord
from jobboard.services.dataset import read_job_entries, records_from_raw

log = logging.getLogger("jobs.import")

JSON_PATH = os.environ.get("FALLBACK_JOBS_PATH", "jobboard/data/fallback_jobs.json")


def to_row(rec: JobRecord) -> Job:
    return Job(
        id=rec.id,
        title=rec.title,
        description=rec.description,
        company=rec.company,
        location=rec.location,
        salary_min=rec.salary_min,
        salary_max=rec.salary_max,
        salary_text=rec.salary,
        job_type=rec.job_type,
        is_active=rec.is_active,
        created_at=rec.created_at,
        skills=[JobSkill(position=i, name=name) for i, name in enumerate(rec.skills)],
    )


def add_records(db: Session, records: Iterable[JobRecord]) -> int:
    """Insert or replace jobs by id; caller commits."""
    n = 0
    for rec in records:
        existing = db.get(Job, rec.id)
        if existing is not None:
            db.delete(existing)
            db.flush()
        db.add(to_row(rec))
        n += 1
    return n


def run(path: str = JSON_PATH) -> int:
    from jobboard.database import Base, SessionLocal, engine

    if not os.path.exists(path):
        log.error("No file found at %s. Nothing to import.", path)
        return 0

    entries, version = read_job_entries(path)
    records = records_from_raw(entries)

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        added = add_records(db, records)
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    log.info("Imported %d jobs (version=%s) from %s", added, version, path)
    return added


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(sys.argv[1] if len(sys.argv) > 1 else JSON_PATH)
