from dataclasses import dataclass
from datetime import date, datetime

import pytest

from calendlyx.services.categorization import (
    activity_status,
    build_month_grid,
    build_year_overview,
    categorize_activities,
    format_activity_date,
    format_activity_datetime,
    get_activities_in_month,
    get_activities_on_date,
    group_by_start_date,
    month_options,
)


@dataclass
class Item:
    name: str
    start_at: datetime
    end_at: datetime


NOW = datetime(2025, 6, 15, 12, 0)


def names(items):
    return [item.name for item in items]


def test_categorize_splits_into_exactly_one_category():
    items = [
        Item("running", datetime(2025, 6, 15, 10), datetime(2025, 6, 15, 14)),
        Item("tomorrow", datetime(2025, 6, 16, 9), datetime(2025, 6, 16, 10)),
        Item("yesterday", datetime(2025, 6, 14, 9), datetime(2025, 6, 14, 10)),
    ]

    result = categorize_activities(items, NOW)

    assert names(result.current) == ["running"]
    assert names(result.upcoming) == ["tomorrow"]
    assert names(result.past) == ["yesterday"]
    assert len(result.current) + len(result.upcoming) + len(result.past) == len(items)


def test_categorize_bounds_are_inclusive():
    starts_now = Item("starts-now", NOW, datetime(2025, 6, 15, 13))
    ends_now = Item("ends-now", datetime(2025, 6, 15, 11), NOW)
    instant = Item("instant", NOW, NOW)

    result = categorize_activities([starts_now, ends_now, instant], NOW)

    assert names(result.current) == ["ends-now", "starts-now", "instant"]
    assert result.upcoming == []
    assert result.past == []


def test_categorize_sort_orders():
    items = [
        Item("up-late", datetime(2025, 7, 2), datetime(2025, 7, 2, 1)),
        Item("up-early", datetime(2025, 7, 1), datetime(2025, 7, 1, 1)),
        Item("past-old", datetime(2025, 1, 1), datetime(2025, 1, 1, 1)),
        Item("past-recent", datetime(2025, 6, 1), datetime(2025, 6, 1, 1)),
        Item("cur-late", datetime(2025, 6, 15, 11), datetime(2025, 6, 16)),
        Item("cur-early", datetime(2025, 6, 10), datetime(2025, 6, 20)),
    ]

    result = categorize_activities(items, NOW)

    assert names(result.upcoming) == ["up-early", "up-late"]
    assert names(result.past) == ["past-recent", "past-old"]
    assert names(result.current) == ["cur-early", "cur-late"]


def test_categorize_ties_keep_input_order():
    start = datetime(2025, 7, 1, 9)
    items = [Item(name, start, datetime(2025, 7, 1, 10)) for name in ("b", "a", "c")]

    assert names(categorize_activities(items, NOW).upcoming) == ["b", "a", "c"]


def test_activity_status_labels():
    assert activity_status(Item("x", datetime(2025, 6, 15), datetime(2025, 6, 16)), NOW) == "current"
    assert activity_status(Item("x", datetime(2025, 6, 16), datetime(2025, 6, 17)), NOW) == "upcoming"
    assert activity_status(Item("x", datetime(2025, 6, 1), datetime(2025, 6, 2)), NOW) == "past"


def test_activities_on_date_includes_every_overlap():
    day = date(2025, 3, 10)
    items = [
        Item("inside", datetime(2025, 3, 10, 9), datetime(2025, 3, 10, 10)),
        Item("starts-on", datetime(2025, 3, 10, 23), datetime(2025, 3, 11, 2)),
        Item("ends-on", datetime(2025, 3, 9, 20), datetime(2025, 3, 10, 0, 30)),
        Item("spans", datetime(2025, 3, 1), datetime(2025, 3, 20)),
        Item("midnight-start", datetime(2025, 3, 10, 0, 0), datetime(2025, 3, 10, 0, 0)),
        Item("ends-at-last-moment", datetime(2025, 3, 9), datetime(2025, 3, 10, 23, 59, 59)),
        Item("day-before", datetime(2025, 3, 9, 9), datetime(2025, 3, 9, 23, 59)),
        Item("next-midnight", datetime(2025, 3, 11, 0, 0), datetime(2025, 3, 11, 1)),
    ]

    result = get_activities_on_date(items, day)

    assert names(result) == [
        "inside",
        "starts-on",
        "ends-on",
        "spans",
        "midnight-start",
        "ends-at-last-moment",
    ]


def test_activities_on_date_accepts_datetime():
    items = [Item("inside", datetime(2025, 3, 10, 9), datetime(2025, 3, 10, 10))]

    assert names(get_activities_on_date(items, datetime(2025, 3, 10, 18, 30))) == ["inside"]


def test_activities_in_month_overlap():
    items = [
        Item("inside", datetime(2025, 2, 10), datetime(2025, 2, 11)),
        Item("from-january", datetime(2025, 1, 30), datetime(2025, 2, 1, 8)),
        Item("into-march", datetime(2025, 2, 28, 22), datetime(2025, 3, 2)),
        Item("spans", datetime(2025, 1, 1), datetime(2025, 4, 1)),
        Item("january", datetime(2025, 1, 5), datetime(2025, 1, 6)),
        Item("march", datetime(2025, 3, 1), datetime(2025, 3, 2)),
    ]

    assert names(get_activities_in_month(items, 2025, 2)) == ["inside", "from-january", "into-march", "spans"]


def test_activities_in_month_rejects_bad_month():
    with pytest.raises(ValueError):
        get_activities_in_month([], 2025, 13)


def test_month_options_newest_first():
    items = [
        Item("a", datetime(2024, 12, 3), datetime(2024, 12, 3, 1)),
        Item("b", datetime(2025, 2, 1), datetime(2025, 2, 1, 1)),
        Item("c", datetime(2025, 2, 20), datetime(2025, 2, 20, 1)),
    ]

    assert month_options(items) == [(2025, 2, "February 2025"), (2024, 12, "December 2024")]


def test_group_by_start_date_skips_empty_days():
    items = [
        Item("late", datetime(2025, 5, 3, 9), datetime(2025, 5, 3, 10)),
        Item("early", datetime(2025, 5, 1, 9), datetime(2025, 5, 1, 10)),
        Item("late-2", datetime(2025, 5, 3, 15), datetime(2025, 5, 3, 16)),
    ]

    groups = group_by_start_date(items)

    assert [group.date for group in groups] == [date(2025, 5, 1), date(2025, 5, 3)]
    assert names(groups[1].items) == ["late", "late-2"]


def test_month_grid_is_sunday_first():
    # June 1st 2025 is a Sunday, February 1st 2025 a Saturday.
    june = build_month_grid([], 2025, 6)
    february = build_month_grid([], 2025, 2)

    assert june[0].day == 1
    assert len(june) == 30
    assert february[:6] == [None] * 6
    assert february[6].day == 1
    assert february[-1].day == 28


def test_month_grid_cells_carry_on_date_activities():
    item = Item("weekend", datetime(2025, 6, 7, 18), datetime(2025, 6, 8, 2))

    grid = build_month_grid([item], 2025, 6)
    busy_days = [cell.day for cell in grid if cell is not None and cell.items]

    assert busy_days == [7, 8]


def test_year_overview_covers_twelve_months():
    item = Item("new-year", datetime(2025, 12, 31, 22), datetime(2026, 1, 1, 2))

    overview = build_year_overview([item], 2025)

    assert [month for month, _ in overview] == list(range(1, 13))
    assert [month for month, items in overview if items] == [12]


def test_date_formatting():
    assert format_activity_date(datetime(2025, 12, 10, 14, 30)) == "Dec 10, 2025"
    assert format_activity_datetime(datetime(2025, 12, 10, 14, 30)) == "Dec 10, 2025, 2:30 PM"
    assert format_activity_datetime(datetime(2025, 1, 2, 0, 5)) == "Jan 2, 2025, 12:05 AM"
