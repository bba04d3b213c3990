import os

# Keep config from touching ./data and keep tracebacks out of responses
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENV", "test")

import pytest  # noqa: E402

from jobboard.services.dataset import FallbackDataset, records_from_raw  # noqa: E402
from jobboard.services.job_query import JobQueryService  # noqa: E402
from jobboard.tests.fakes import FailingStore, make_store  # noqa: E402

# Shared by both backends: every parity test seeds the store and the
# fallback dataset from this list.
RAW_JOBS = [
    {
        "_id": "aaaaaaaaaaaaaaaaaaaaaa01",
        "title": "Backend Engineer",
        "company": "Acme",
        "location": "Dhaka",
        "description": "Python services and REST APIs.",
        "salaryMin": 80000,
        "salaryMax": 100000,
        "jobType": "full-time",
        "skills": ["Python", "Node.js"],
        "createdAt": "2025-01-10T10:00:00Z",
    },
    {
        "_id": "aaaaaaaaaaaaaaaaaaaaaa02",
        "title": "Frontend Engineer",
        "company": "Beta",
        "location": "Remote",
        "description": "Component libraries and design systems.",
        "jobType": "full time",
        "skills": ["React", "CSS"],
        "createdAt": "2025-01-09T10:00:00Z",
    },
    {
        "_id": "aaaaaaaaaaaaaaaaaaaaaa03",
        "title": "DevOps Engineer",
        "company": "Acme",
        "location": "Dhaka",
        "description": "Pipelines, clusters, on-call.",
        "salaryMin": 90000,
        "salaryMax": 90000,
        "jobType": "contract",
        "skills": ["AWS", "Kubernetes"],
        "createdAt": "2025-01-08T10:00:00Z",
    },
    {
        # same createdAt as ...03: id decides
        "_id": "aaaaaaaaaaaaaaaaaaaaaa04",
        "title": "C++ Developer",
        "company": "Gamma",
        "location": "Chittagong",
        "description": "Realtime systems (low latency) in C++. 100% onsite.",
        "salaryMin": 70000,
        "jobType": "full-time",
        "skills": ["C++", "Linux"],
        "createdAt": "2025-01-08T10:00:00Z",
    },
    {
        "_id": "aaaaaaaaaaaaaaaaaaaaaa05",
        "title": "Data Analyst",
        "company": "Beta",
        "location": "Sylhet",
        "description": "Dashboards in Tableau; some React exposure helps.",
        "salaryMax": 60000,
        "jobType": "part-time",
        "skills": ["SQL", "Excel"],
        "createdAt": "2025-01-07T10:00:00Z",
    },
    {
        "_id": "aaaaaaaaaaaaaaaaaaaaaa06",
        "title": "React Native Developer",
        "company": "Beta",
        "location": "Dhaka",
        "description": "Mobile apps.",
        "salaryMin": 50000,
        "salaryMax": 70000,
        "jobType": "temporary",
        "skills": ["React Native"],
        "createdAt": "2025-01-11T10:00:00Z",
        "isActive": False,
    },
    {
        "_id": "aaaaaaaaaaaaaaaaaaaaaa07",
        "title": "Engineering Manager",
        "company": "Q.*Corp",
        "description": None,
        "salary": "$120k - $150k",
        "jobType": "freelance",
        "skills": [],
        "createdAt": "2025-01-05T10:00:00Z",
    },
    {
        "_id": "aaaaaaaaaaaaaaaaaaaaaa08",
        "title": "backend engineer",
        "company": "Delta",
        "location": "Remote",
        "description": "Node and Go microservices.",
        "salaryMin": 100000,
        "salaryMax": 100000,
        "jobType": "internship",
        "skills": ["Go", "node"],
        "createdAt": "2025-01-06T10:00:00Z",
    },
]


@pytest.fixture
def records():
    return records_from_raw(RAW_JOBS)


@pytest.fixture
def dataset(records):
    return FallbackDataset(records=records, version="test", source="fixture")


@pytest.fixture
def store(tmp_path, records):
    return make_store(tmp_path, records)


@pytest.fixture
def service(store, dataset):
    return JobQueryService(store, dataset)


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def fallback_service(failing_store, dataset):
    return JobQueryService(failing_store, dataset)
