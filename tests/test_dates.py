from __future__ import annotations

import datetime as dt

import pytest

from ledger_classifier.dates import resolve_date, resolve_date_legacy, subtract_months

TODAY = dt.date(2024, 3, 15)


def _resolve(text: str, today: dt.date = TODAY):
    return resolve_date(text.lower().strip(), text, today=today)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("comprei hoje", TODAY),
        ("paid today", TODAY),
        ("comprei ontem", TODAY - dt.timedelta(days=1)),
        ("spent yesterday", TODAY - dt.timedelta(days=1)),
        ("anteontem no cinema", TODAY - dt.timedelta(days=2)),
        ("the day before yesterday", TODAY - dt.timedelta(days=2)),
        ("há 3 dias", TODAY - dt.timedelta(days=3)),
        ("ha 1 dia", TODAY - dt.timedelta(days=1)),
        ("5 days ago", TODAY - dt.timedelta(days=5)),
        ("há 2 semanas", TODAY - dt.timedelta(weeks=2)),
        ("1 week ago", TODAY - dt.timedelta(weeks=1)),
        ("há 1 mês", dt.date(2024, 2, 15)),
        ("há 3 meses", dt.date(2023, 12, 15)),
        ("2 months ago", dt.date(2024, 1, 15)),
        ("semana passada", TODAY - dt.timedelta(weeks=1)),
        ("last week", TODAY - dt.timedelta(weeks=1)),
        ("mês passado", dt.date(2024, 2, 15)),
        ("mes passado", dt.date(2024, 2, 15)),
        ("last month", dt.date(2024, 2, 15)),
        ("jantar 2024-01-20", dt.date(2024, 1, 20)),
        ("jantar 05/02/2024", dt.date(2024, 2, 5)),
    ],
)
def test_detected_dates(text: str, expected: dt.date) -> None:
    result = _resolve(text)
    assert result.date == expected
    assert result.explicitly_detected is True


def test_no_marker_defaults_to_today_not_detected() -> None:
    result = _resolve("comprei")
    assert result.date == TODAY
    assert result.explicitly_detected is False


def test_anteontem_does_not_trigger_ontem() -> None:
    assert _resolve("anteontem").date == TODAY - dt.timedelta(days=2)


def test_rule_order_today_beats_explicit_date() -> None:
    assert _resolve("hoje 2020-01-01").date == TODAY


def test_month_offset_clamps_to_month_end() -> None:
    assert _resolve("há 1 mês", today=dt.date(2024, 3, 31)).date == dt.date(2024, 2, 29)
    assert subtract_months(dt.date(2023, 3, 31), 1) == dt.date(2023, 2, 28)
    assert subtract_months(dt.date(2024, 1, 31), 2) == dt.date(2023, 11, 30)


def test_invalid_iso_date_falls_through_to_next_rule() -> None:
    result = _resolve("2024-02-30 ou 10/03/2024")
    assert result.date == dt.date(2024, 3, 10)
    assert result.explicitly_detected is True


def test_invalid_explicit_dates_fall_back_to_today() -> None:
    result = _resolve("2024-13-01 e 31/02/2024")
    assert result.date == TODAY
    assert result.explicitly_detected is False


def test_overflowing_offset_skips_rule() -> None:
    # 10**7 weeks cannot be represented; evaluation continues to the ISO rule.
    result = _resolve("há 10000000 semanas 2024-01-02")
    assert result.date == dt.date(2024, 1, 2)
    assert result.explicitly_detected is True


def test_overflowing_month_offset_defaults_to_today() -> None:
    result = _resolve("há 999999 meses")
    assert result.date == TODAY
    assert result.explicitly_detected is False


def test_explicit_dates_read_from_original_text() -> None:
    result = resolve_date("sem data", "Sem data 2023-07-04", today=TODAY)
    assert result.date == dt.date(2023, 7, 4)


def test_default_reference_is_current_date() -> None:
    assert resolve_date("ontem").date == dt.date.today() - dt.timedelta(days=1)


def test_legacy_only_knows_today_yesterday_and_explicit_dates() -> None:
    assert resolve_date_legacy("ontem", today=TODAY).date == TODAY - dt.timedelta(days=1)
    assert resolve_date_legacy("2024-01-20", today=TODAY).date == dt.date(2024, 1, 20)
    legacy = resolve_date_legacy("há 3 dias", today=TODAY)
    assert legacy.date == TODAY
    assert legacy.explicitly_detected is False
