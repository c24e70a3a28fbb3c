"""Tests for the hierarchy builder."""

import pytest

from company_tree.domain.errors import (
    DanglingReferenceError,
    DuplicateCompanyError,
    HierarchyCycleError,
    RecordFormatError,
    RootResolutionError,
)
from company_tree.services import CostAggregator
from company_tree.services.hierarchy_builder import (
    HierarchyBuilder,
    company_from_record,
    travel_from_record,
)


def _shape(company):
    return (company.id, [_shape(child) for child in company.children])


class TestRecordParsing:
    def test_company_fields_are_mapped(self, make_company):
        company = company_from_record(make_company("c1", "0", "Acme"))

        assert company.id == "c1"
        assert company.parent_id == "0"
        assert company.name == "Acme"
        assert company.created_at == "2021-02-26T00:55:36.632Z"

    def test_numeric_ids_are_coerced_to_strings(self, make_company):
        company = company_from_record(make_company(7, 0))

        assert company.id == "7"
        assert company.parent_id == "0"

    def test_string_price_is_coerced(self, make_travel):
        travel = travel_from_record(make_travel("t1", "c1", "156.00"))

        assert travel.price == 156.0
        assert travel.company_id == "c1"

    def test_missing_field_is_reported(self, make_company):
        record = make_company("c1", "0")
        del record["parentId"]

        with pytest.raises(RecordFormatError) as exc_info:
            company_from_record(record, 4)

        assert exc_info.value.field_name == "parentId"
        assert exc_info.value.index == 4
        assert exc_info.value.resource == "companies"

    @pytest.mark.parametrize(
        "price", ["abc", -5, None, "nan", "inf", "-inf", float("nan"), float("inf")]
    )
    def test_unusable_price_is_reported(self, make_travel, price):
        with pytest.raises(RecordFormatError) as exc_info:
            travel_from_record(make_travel("t1", "c1", price))

        assert exc_info.value.field_name == "price"


class TestLinking:
    def test_builds_expected_shape(self, strict_config, company_records, travel_records):
        tree = HierarchyBuilder(strict_config).build(company_records, travel_records)

        assert tree.root.id == "root"
        assert tree.company_count == 5
        assert _shape(tree.root) == (
            "root",
            [("a", [("a1", [])]), ("b", [("b1", [])])],
        )

    def test_each_company_has_exactly_one_parent(
        self, strict_config, company_records, travel_records
    ):
        tree = HierarchyBuilder(strict_config).build(company_records, travel_records)

        parents = {}
        for company in tree.iter_companies():
            for child in company.children:
                assert child.id not in parents
                parents[child.id] = company.id

        for company in tree.iter_companies():
            if company is tree.root:
                assert company.id not in parents
            else:
                assert parents[company.id] == company.parent_id

    def test_children_follow_input_order(self, strict_config, make_company):
        records = [
            make_company("r", "0"),
            make_company("z", "r"),
            make_company("m", "r"),
            make_company("a", "r"),
        ]

        tree = HierarchyBuilder(strict_config).build(records, [])

        assert [c.id for c in tree.root.children] == ["z", "m", "a"]

    def test_child_listed_before_parent_is_linked(self, strict_config, make_company):
        records = [
            make_company("leaf", "mid"),
            make_company("mid", "top"),
            make_company("top", "0"),
        ]

        tree = HierarchyBuilder(strict_config).build(records, [])

        assert _shape(tree.root) == ("top", [("mid", [("leaf", [])])])

    def test_costs_are_not_computed_by_build(
        self, strict_config, company_records, travel_records
    ):
        tree = HierarchyBuilder(strict_config).build(company_records, travel_records)

        assert all(not c.is_valued for c in tree.iter_companies())

    def test_builds_are_deterministic(
        self, strict_config, company_records, travel_records
    ):
        builder = HierarchyBuilder(strict_config)

        first = builder.build(company_records, travel_records)
        second = builder.build(company_records, travel_records)

        assert first.root is not second.root
        assert _shape(first.root) == _shape(second.root)

        aggregator = CostAggregator()
        aggregator.aggregate(first.root)
        aggregator.aggregate(second.root)
        assert [(c.id, c.total_cost) for c in first.iter_companies()] == [
            (c.id, c.total_cost) for c in second.iter_companies()
        ]


class TestTravelAttachment:
    def test_travels_attach_in_input_order(self, strict_config, make_company, make_travel):
        companies = [make_company("r", "0")]
        travels = [make_travel("t2", "r", 2), make_travel("t1", "r", 1)]

        tree = HierarchyBuilder(strict_config).build(companies, travels)

        assert [t.id for t in tree.root.travels] == ["t2", "t1"]

    def test_orphan_travel_is_dropped_without_error(
        self, strict_config, company_records, travel_records, make_travel
    ):
        travel_records.append(make_travel("orphan", "ghost", 999))

        tree = HierarchyBuilder(strict_config).build(company_records, travel_records)

        assert [t.id for t in tree.dropped_travels] == ["orphan"]
        for company in tree.iter_companies():
            assert "orphan" not in [t.id for t in company.travels]

    def test_orphan_travels_are_logged(
        self, strict_config, company_records, make_travel, caplog
    ):
        with caplog.at_level("WARNING"):
            HierarchyBuilder(strict_config).build(
                company_records, [make_travel("orphan", "ghost", 1)]
            )

        assert "Dropped travels without an owning company" in caplog.text


class TestErrors:
    def test_dangling_parent_fails_the_build(self, strict_config, make_company):
        records = [make_company("r", "0"), make_company("c", "missing")]

        with pytest.raises(DanglingReferenceError) as exc_info:
            HierarchyBuilder(strict_config).build(records, [])

        assert exc_info.value.parent_id == "missing"
        assert exc_info.value.company_id == "c"
        assert "missing" in str(exc_info.value)

    def test_dangling_parent_fails_under_last_wins(self, last_wins_config, make_company):
        records = [make_company("r", "0"), make_company("c", "missing")]

        with pytest.raises(DanglingReferenceError):
            HierarchyBuilder(last_wins_config).build(records, [])

    def test_duplicate_company_id(self, strict_config, make_company):
        records = [make_company("r", "0"), make_company("r", "0")]

        with pytest.raises(DuplicateCompanyError) as exc_info:
            HierarchyBuilder(strict_config).build(records, [])

        assert exc_info.value.company_id == "r"

    def test_bad_travel_record_fails_the_build(
        self, strict_config, company_records, make_travel
    ):
        with pytest.raises(RecordFormatError) as exc_info:
            HierarchyBuilder(strict_config).build(
                company_records, [make_travel("t1", "root", "ten")]
            )

        assert exc_info.value.resource == "travels"


class TestRootPolicy:
    def test_strict_rejects_several_roots(self, strict_config, make_company):
        records = [make_company("r1", "0"), make_company("r2", "0")]

        with pytest.raises(RootResolutionError) as exc_info:
            HierarchyBuilder(strict_config).build(records, [])

        assert exc_info.value.candidate_ids == ("r1", "r2")

    def test_strict_rejects_no_root(self, strict_config, make_company):
        records = [make_company("a", "b"), make_company("b", "a")]

        with pytest.raises(RootResolutionError) as exc_info:
            HierarchyBuilder(strict_config).build(records, [])

        assert exc_info.value.candidate_ids == ()

    def test_strict_rejects_empty_input(self, strict_config):
        with pytest.raises(RootResolutionError):
            HierarchyBuilder(strict_config).build([], [])

    def test_strict_rejects_cycle_detached_from_root(self, strict_config, make_company):
        records = [
            make_company("r", "0"),
            make_company("a", "b"),
            make_company("b", "a"),
        ]

        with pytest.raises(HierarchyCycleError) as exc_info:
            HierarchyBuilder(strict_config).build(records, [])

        assert exc_info.value.company_ids == ("a", "b")

    def test_strict_rejects_self_parent(self, strict_config, make_company):
        records = [make_company("r", "0"), make_company("s", "s")]

        with pytest.raises(HierarchyCycleError):
            HierarchyBuilder(strict_config).build(records, [])

    def test_last_wins_keeps_last_candidate(self, last_wins_config, make_company):
        records = [
            make_company("r1", "0"),
            make_company("c", "r1"),
            make_company("r2", "0"),
        ]

        tree = HierarchyBuilder(last_wins_config).build(records, [])

        assert tree.root.id == "r2"
        assert tree.company_count == 3

    def test_last_wins_without_candidates_has_no_root(
        self, last_wins_config, make_company
    ):
        records = [make_company("a", "b"), make_company("b", "a")]

        tree = HierarchyBuilder(last_wins_config).build(records, [])

        assert tree.root is None
        assert not tree.has_root

    def test_sentinel_resolves_when_company_zero_exists(
        self, last_wins_config, make_company
    ):
        records = [make_company("0", "0"), make_company("top", "0")]

        tree = HierarchyBuilder(last_wins_config).build(records, [])

        assert tree.root is None
