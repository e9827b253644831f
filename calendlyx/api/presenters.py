from collections.abc import Sequence
from datetime import date, datetime

from calendlyx.models.activity import Activity
from calendlyx.schemas.activity import (
    ActivityRead,
    ActivityWithStatus,
    CalendarDay,
    CategorizedActivitiesRead,
    DateGroup,
    MonthOption,
    MonthSummary,
    MonthView,
    YearOverview,
)
from calendlyx.services import categorization


def with_status(activities: Sequence[Activity], now: datetime) -> list[ActivityWithStatus]:
    return [
        ActivityWithStatus(
            **ActivityRead.model_validate(activity).model_dump(),
            status=categorization.activity_status(activity, now),
        )
        for activity in activities
    ]


def categorized(activities: Sequence[Activity], now: datetime) -> CategorizedActivitiesRead:
    result = categorization.categorize_activities(activities, now)
    return CategorizedActivitiesRead(
        current=[ActivityRead.model_validate(a) for a in result.current],
        upcoming=[ActivityRead.model_validate(a) for a in result.upcoming],
        past=[ActivityRead.model_validate(a) for a in result.past],
    )


def date_groups(activities: Sequence[Activity], now: datetime) -> list[DateGroup]:
    return [
        DateGroup(
            date=group.date,
            label=categorization.format_activity_date(group.date),
            activities=with_status(group.items, now),
        )
        for group in categorization.group_by_start_date(activities)
    ]


def month_options(activities: Sequence[Activity]) -> list[MonthOption]:
    return [
        MonthOption(key=f"{year}-{month:02d}", label=label, year=year, month=month)
        for year, month, label in categorization.month_options(activities)
    ]


def month_view(activities: Sequence[Activity], year: int, month: int, now: datetime) -> MonthView:
    in_month = categorization.get_activities_in_month(activities, year, month)
    cells: list[CalendarDay | None] = []
    for cell in categorization.build_month_grid(activities, year, month):
        if cell is None:
            cells.append(None)
            continue
        cells.append(CalendarDay(day=cell.day, date=cell.date, activities=with_status(cell.items, now)))
    return MonthView(
        year=year,
        month=month,
        label=categorization.month_label(year, month),
        cells=cells,
        activities=with_status(in_month, now),
        groups=date_groups(in_month, now),
    )


def year_overview(activities: Sequence[Activity], year: int, now: datetime) -> YearOverview:
    return YearOverview(
        year=year,
        months=[
            MonthSummary(
                month=month,
                label=categorization.month_label(year, month),
                count=len(items),
                activities=with_status(items, now),
            )
            for month, items in categorization.build_year_overview(activities, year)
        ],
    )


def on_date(activities: Sequence[Activity], day: date, now: datetime) -> list[ActivityWithStatus]:
    return with_status(categorization.get_activities_on_date(activities, day), now)
