from datetime import date, timedelta

from adapters.base import AvailabilityPoint
from matcher import DateRange, match

FRIDAY = 5
SATURDAY = 6

# 2025-07-04 is a Friday
FRI = date(2025, 7, 4)
SAT = date(2025, 7, 5)
SUN = date(2025, 7, 6)


def days(start: date, *flags: bool) -> list:
    return [AvailabilityPoint(date=start + timedelta(days=i), is_available=f) for i, f in enumerate(flags)]


def test_two_night_stay_fri_to_sun():
    ranges = match(days(FRI, True, True, True), FRIDAY, 2)
    assert ranges == [DateRange(start=FRI, end=SUN)]


def test_unavailable_night_breaks_the_run():
    assert match(days(FRI, True, False, True), FRIDAY, 2) == []


def test_checkout_day_availability_is_ignored():
    ranges = match(days(FRI, True, False), FRIDAY, 1)
    assert ranges == [DateRange(start=FRI, end=SAT)]


def test_stay_needs_a_checkout_day_in_the_data():
    # Fri and Sat are free but there is no Sunday entry to close the stay on
    assert match(days(FRI, True, True), FRIDAY, 2) == []


def test_gap_right_after_start_aborts_sequence():
    # Fri free, Sat free, Sun taken: a 3-night stay from Friday can't happen
    assert match(days(FRI, True, True, False, True, True), FRIDAY, 3) == []


def test_wrong_weekday_never_starts_a_stay():
    ranges = match(days(FRI, True, True, True, True), SATURDAY, 2)
    assert ranges == [DateRange(start=SAT, end=date(2025, 7, 7))]


def test_checkout_day_is_not_reused_as_next_start():
    # Two full weeks free from Friday; the second Friday is the first stay's checkout
    ranges = match(days(FRI, *([True] * 15)), FRIDAY, 7)
    assert ranges == [DateRange(start=FRI, end=FRI + timedelta(days=7))]


def test_finds_one_stay_per_week():
    flags = [True] * 3 + [False] * 4 + [True] * 3
    ranges = match(days(FRI, *flags), FRIDAY, 2)
    assert ranges == [
        DateRange(start=FRI, end=SUN),
        DateRange(start=FRI + timedelta(days=7), end=SUN + timedelta(days=7)),
    ]


def test_stay_longer_than_data_yields_nothing():
    assert match(days(FRI, True, True, True), FRIDAY, 10) == []


def test_empty_input():
    assert match([], FRIDAY, 2) == []


def test_every_range_has_requested_length_and_weekday():
    flags = [i % 11 != 3 for i in range(90)]
    availabilities = days(date(2025, 6, 1), *flags)
    free = {p.date for p in availabilities if p.is_available}

    ranges = match(availabilities, FRIDAY, 2)

    assert ranges
    for r in ranges:
        assert r.nights == 2
        assert r.start.isoweekday() == FRIDAY
        night = r.start
        while night < r.end:
            assert night in free
            night += timedelta(days=1)


def test_same_input_same_output():
    availabilities = days(FRI, True, True, True, False, True)
    assert match(availabilities, FRIDAY, 2) == match(availabilities, FRIDAY, 2)


def test_date_range_key_is_a_date_tuple():
    assert DateRange(start=FRI, end=SUN).key == (FRI, SUN)


def test_missing_night_breaks_the_run():
    # Friday, then nothing until September: the hole is not a free night
    availabilities = [
        AvailabilityPoint(date(2025, 7, 25), True),
        AvailabilityPoint(date(2025, 9, 1), True),
        AvailabilityPoint(date(2025, 9, 2), True),
    ]
    assert match(availabilities, FRIDAY, 2) == []


def test_missing_checkout_day_breaks_the_run():
    availabilities = [
        AvailabilityPoint(FRI, True),
        AvailabilityPoint(SAT, True),
        AvailabilityPoint(date(2025, 7, 8), True),
    ]
    assert match(availabilities, FRIDAY, 2) == []


def test_every_range_has_requested_length_with_holes_in_data():
    start = date(2025, 6, 1)
    availabilities = [
        AvailabilityPoint(start + timedelta(days=i), True)
        for i in range(120)
        if i % 9 not in (4, 5)
    ]

    ranges = match(availabilities, FRIDAY, 2)

    assert ranges
    assert all(r.nights == 2 for r in ranges)
