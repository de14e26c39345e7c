"""Override table maintenance: sparse-table invariant and future-plan reset."""

from __future__ import annotations

import math

import pytest

from models.plan import PeriodOverride, PlanData
from plan.overrides import (
    parse_amount,
    prune_overrides,
    reset_future_plan,
    set_external_override,
    set_override_field,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1500", 1500.0),
        (" -250.5 ", -250.5),
        ("1,5", 1.5),
        ("1.500,50", 1500.5),
        ("-12.000,5", -12000.5),
        ("1.500", 1.5),
        ("1,000,5", None),
        (3, 3.0),
        (0, 0.0),
        ("", None),
        ("   ", None),
        ("abc", None),
        (None, None),
        (math.nan, None),
        ("inf", None),
        (True, None),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_set_field_creates_entry_only_for_populated_value():
    assert set_override_field({}, "future-sem-0", "change", "") == {}
    table = set_override_field({}, "future-sem-0", "change", "2000")
    assert table == {"future-sem-0": PeriodOverride(change=2000)}


def test_zero_is_a_populated_value():
    table = set_override_field({}, "future-sem-0", "change", 0)
    assert table["future-sem-0"].change == 0
    assert not table["future-sem-0"].is_empty


def test_sequential_clearing_removes_the_override():
    table = set_override_field({}, "future-sem-4", "change", "1000")
    table = set_override_field(table, "future-sem-4", "savings", "300")
    table = set_override_field(table, "future-sem-4", "change", "")
    assert table["future-sem-4"] == PeriodOverride(savings=300)

    table = set_override_field(table, "future-sem-4", "savings", "not a number")
    assert "future-sem-4" not in table
    assert table == {}


def test_helpers_do_not_mutate_their_input():
    original = {"future-sem-1": PeriodOverride(change=10)}
    updated = set_override_field(original, "future-sem-1", "change", None)
    assert updated == {}
    assert original == {"future-sem-1": PeriodOverride(change=10)}


def test_unknown_field_raises():
    with pytest.raises(KeyError):
        set_override_field({}, "future-sem-0", "bogus", "1")


def test_external_override_map_is_pruned():
    table = set_external_override({}, "future-sem-2", "as-7", "150000")
    table = set_external_override(table, "future-sem-2", "as-2", "80000")
    assert table["future-sem-2"].external_capital_overrides == {"as-7": 150000, "as-2": 80000}

    table = set_external_override(table, "future-sem-2", "as-7", "")
    assert table["future-sem-2"].external_capital_overrides == {"as-2": 80000}

    table = set_external_override(table, "future-sem-2", "as-2", None)
    assert table == {}


def test_external_clear_keeps_other_fields():
    table = set_override_field({}, "future-sem-2", "portfolio_override", "1")
    table = set_external_override(table, "future-sem-2", "as-7", "5")
    table = set_external_override(table, "future-sem-2", "as-7", "")
    assert table == {"future-sem-2": PeriodOverride(portfolio_override=1)}


def test_reset_future_plan_keeps_historical_corrections():
    table = {
        "appt-1-2": PeriodOverride(change=10000),
        "future-sem-0": PeriodOverride(savings=0),
        "future-sem-7": PeriodOverride(change=-5000),
        "future-sem-19": PeriodOverride(portfolio_override=1),
    }
    reset = reset_future_plan(table, {"appt-1-1", "appt-1-2"})
    assert reset == {"appt-1-2": PeriodOverride(change=10000)}


def test_prune_overrides():
    table = {"a": PeriodOverride(), "b": PeriodOverride(change=1)}
    assert prune_overrides(table) == {"b": PeriodOverride(change=1)}


def test_plan_data_drops_empty_overrides_on_construction():
    plan = PlanData(overrides={"a": PeriodOverride(), "b": {"change": 5}})
    assert list(plan.overrides) == ["b"]


def test_plan_data_accepts_list_form():
    plan = PlanData.model_validate({
        "annualReturn": 5,
        "overrides": [{"id": "appt-1", "change": 100}, {"id": "future-sem-0"}],
    })
    assert plan.overrides == {"appt-1": PeriodOverride(change=100)}
