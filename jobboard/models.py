# jobboard/models.py
from __future__ import annotations

import secrets

from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey, Index, Boolean
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func as sa_func

from jobboard.database import Base


def new_object_id() -> str:
    """24 lowercase hex chars, the same shape the fallback snapshot uses."""
    return secrets.token_hex(12)


# =======================
# Job model
# =======================
class Job(Base):
    __tablename__ = "jobs"

    id = Column(String(24), primary_key=True, default=new_object_id)

    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    company = Column(String(255), nullable=True, index=True)
    location = Column(String(255), nullable=True, index=True)

    # Numeric range drives sorting; salary_text is display-only
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    salary_text = Column(String(120), nullable=True)

    job_type = Column(String(20), nullable=True, index=True)   # full-time | part-time | contract | ...
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime, nullable=False, server_default=sa_func.now(), index=True)

    skills = relationship(
        "JobSkill",
        back_populates="job",
        order_by="JobSkill.position",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_jobs_active_created", "is_active", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Job id={self.id} title={self.title!r}>"


# =======================
# Skill tags (ordered)
# =======================
class JobSkill(Base):
    __tablename__ = "job_skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(String(24), ForeignKey("jobs.id", ondelete="CASCADE"), index=True, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(100), nullable=False)

    job = relationship("Job", back_populates="skills")

    __table_args__ = (
        Index("ix_job_skills_job_position", "job_id", "position"),
    )

    def __repr__(self) -> str:
        return f"<JobSkill job_id={self.job_id} name={self.name!r}>"
