import asyncio

import pytest

from jobboard.schemas.jobs import SortKey
from jobboard.services.dataset import records_from_raw
from jobboard.services.filters import normalize_filters
from jobboard.services.memory_query import MemoryJobBackend
from jobboard.services.pagination import paginate
from jobboard.tests.fakes import make_store

# golden filters: each case must select and order the same ids in both backends
FILTER_CASES = [
    {},
    {"title": "engineer"},
    {"title": "C++"},
    {"title": "  "},
    {"location": "dhaka"},
    {"location": "remote", "title": "engineer"},
    {"keywords": "react,node"},
    {"keywords": "NODE"},
    {"keywords": "go"},
    {"keywords": "node.js"},
    {"keywords": "js,kube"},
    {"keywords": "c++"},
    {"keywords": "kubernetes, ,sql"},
    {"skills": "linux"},
    {"q": "acme"},
    {"q": "c++"},
    {"q": "engineer"},
    {"q": "backend engineer"},
    {"q": "%"},
    {"q": "_"},
    {"q": "Q.*"},
    {"q": "(low"},
    {"q": "[a-z]+"},
    {"q": "react", "keywords": "sql"},
    {"job_type": "full-time"},
    {"job_type": "Full Time", "location": "dhaka"},
    {"job_type": "nonsense"},
    {"title": "nothing-matches-this"},
]

SORT_KEYS = list(SortKey)


def _ids(items):
    return [j.id for j in items]


@pytest.mark.parametrize("raw", FILTER_CASES)
@pytest.mark.parametrize("sort_key", SORT_KEYS)
def test_store_and_memory_agree(store, records, raw, sort_key):
    filters = normalize_filters(**raw)
    page = paginate(1, 50)
    memory = MemoryJobBackend(records)

    store_items, store_total = asyncio.run(store.list_page(filters, sort_key, page))
    mem_items, mem_total = memory.list_page(filters, sort_key, page)

    assert store_total == mem_total
    assert _ids(store_items) == _ids(mem_items)


@pytest.mark.parametrize("sort_key", SORT_KEYS)
@pytest.mark.parametrize("page_no", [1, 2, 3, 4])
def test_pages_agree(store, records, sort_key, page_no):
    filters = normalize_filters(q="engineer")
    page = paginate(page_no, 2)
    memory = MemoryJobBackend(records)

    store_items, store_total = asyncio.run(store.list_page(filters, sort_key, page))
    mem_items, mem_total = memory.list_page(filters, sort_key, page)

    assert store_total == mem_total
    assert _ids(store_items) == _ids(mem_items)


def test_records_survive_the_store_unchanged(store, records):
    filters = normalize_filters()
    items, _ = asyncio.run(store.list_page(filters, SortKey.RECENT, paginate(1, 50)))
    by_id = {r.id: r for r in records}
    for item in items:
        assert item == by_id[item.id]


def test_stats_agree(store, records):
    memory = MemoryJobBackend(records)
    assert asyncio.run(store.stats(10)) == memory.stats(10)
    assert asyncio.run(store.stats(1)) == memory.stats(1)


def test_get_agrees(store, records):
    memory = MemoryJobBackend(records)
    for rec in records:
        assert asyncio.run(store.get(rec.id)) == memory.get(rec.id)
    assert asyncio.run(store.get("ffffffffffffffffffffffff")) is None
    assert memory.get("ffffffffffffffffffffffff") is None


# non-ASCII text must fold the same way in both backends
UNICODE_JOBS = [
    {"_id": "cccccccccccccccccccccc01", "title": "Ürün Müdürü", "company": "Çağrı Yazılım",
     "location": "İstanbul", "description": "ÖZEL bir proje.", "skills": ["Veri Analizi"],
     "createdAt": "2025-04-01T00:00:00Z"},
    {"_id": "cccccccccccccccccccccc02", "title": "Straße Planner", "company": "Bäckerei Groß",
     "location": "München", "description": "Café logistics.", "skills": ["ÉTL"],
     "createdAt": "2025-04-02T00:00:00Z"},
    {"_id": "cccccccccccccccccccccc03", "title": "ürün analisti", "company": "acme",
     "location": "Ankara", "description": "Ürün verileri.", "skills": ["SQL"],
     "createdAt": "2025-04-03T00:00:00Z"},
]

UNICODE_CASES = [
    ({"title": "ürün"}, {"cccccccccccccccccccccc01", "cccccccccccccccccccccc03"}),
    ({"title": "ÜRÜN"}, {"cccccccccccccccccccccc01", "cccccccccccccccccccccc03"}),
    ({"location": "MÜNCHEN"}, {"cccccccccccccccccccccc02"}),
    ({"location": "İSTANBUL"}, {"cccccccccccccccccccccc01"}),
    ({"q": "özel"}, {"cccccccccccccccccccccc01"}),
    ({"q": "çağrı"}, {"cccccccccccccccccccccc01"}),
    ({"q": "CAFÉ"}, {"cccccccccccccccccccccc02"}),
    ({"keywords": "étl"}, {"cccccccccccccccccccccc02"}),
    ({"keywords": "veri analizi"}, {"cccccccccccccccccccccc01"}),
    ({"q": "ürün müdürü"}, {"cccccccccccccccccccccc01"}),
]


@pytest.fixture
def unicode_backends(tmp_path):
    records = records_from_raw(UNICODE_JOBS)
    return make_store(tmp_path, records, name="unicode.db"), MemoryJobBackend(records)


@pytest.mark.parametrize("raw,expected", UNICODE_CASES)
@pytest.mark.parametrize("sort_key", SORT_KEYS)
def test_non_ascii_text_folds_alike(unicode_backends, raw, expected, sort_key):
    store, memory = unicode_backends
    filters = normalize_filters(**raw)
    page = paginate(1, 50)

    store_items, store_total = asyncio.run(store.list_page(filters, sort_key, page))
    mem_items, mem_total = memory.list_page(filters, sort_key, page)

    assert set(_ids(mem_items)) == expected
    assert store_total == mem_total == len(expected)
    assert _ids(store_items) == _ids(mem_items)


def test_non_ascii_relevance_ranks_alike(unicode_backends):
    store, memory = unicode_backends
    filters = normalize_filters(q="ÜRÜN")
    page = paginate(1, 50)

    store_items, _ = asyncio.run(store.list_page(filters, SortKey.RELEVANT, page))
    mem_items, _ = memory.list_page(filters, SortKey.RELEVANT, page)

    # both titles contain it; the description hit breaks the tie for ...03
    assert _ids(store_items) == _ids(mem_items) == ["cccccccccccccccccccccc03", "cccccccccccccccccccccc01"]
