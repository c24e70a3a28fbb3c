"""Shared fixtures: a small three-level hierarchy.

    root (10)
    ├── a (5)
    │   └── a1 (3)
    └── b (7)
        └── b1 (2)
"""

import pytest

from company_tree.adapters.fetch import InMemoryRecordFetcher
from company_tree.config import OutputConfig, SourceConfig, TreeConfig


def company(id, parent_id, name=None):
    return {
        "id": id,
        "parentId": parent_id,
        "name": name or f"Company {id}",
        "createdAt": "2021-02-26T00:55:36.632Z",
    }


def travel(id, company_id, price):
    return {
        "id": id,
        "price": price,
        "departure": "Paris",
        "destination": "Lyon",
        "companyId": company_id,
        "createdAt": "2020-08-27T00:22:26.927Z",
    }


@pytest.fixture
def company_records():
    return [
        company("root", "0", "Holding"),
        company("a", "root"),
        company("b", "root"),
        company("a1", "a"),
        company("b1", "b"),
    ]


@pytest.fixture
def travel_records():
    return [
        travel("t1", "root", "10.00"),
        travel("t2", "a", 5),
        travel("t3", "a1", 3.0),
        travel("t4", "b", "7"),
        travel("t5", "b1", 2),
    ]


@pytest.fixture
def strict_config():
    return TreeConfig(root_policy="strict")


@pytest.fixture
def last_wins_config():
    return TreeConfig(root_policy="last_wins")


@pytest.fixture
def output_config():
    return OutputConfig(indent=2, include_travels=False)


@pytest.fixture
def source_config(tmp_path):
    return SourceConfig(
        kind="file",
        base_url="https://api.example.org/v1",
        companies_resource="companies",
        travels_resource="travels",
        timeout_seconds=5,
        data_dir=tmp_path,
    )


@pytest.fixture
def memory_fetcher(company_records, travel_records):
    return InMemoryRecordFetcher(
        {"companies": company_records, "travels": travel_records}
    )


@pytest.fixture
def make_company():
    return company


@pytest.fixture
def make_travel():
    return travel
