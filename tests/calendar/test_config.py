"""
tests/calendar/test_config.py

Covers:
  - Parsing raw config mappings (defaults, weekday names, date formats)
  - YAML strings and files
  - Validation of holiday/extra-working-date overlap after loading
  - Malformed configs
"""

from datetime import date

import pytest

from business.calendar import (
    WORKWEEK,
    Calendar,
    CalendarConfig,
    ConfigParseError,
    ValidationError,
    Weekday,
    load,
    loads,
    parse_config,
)


FULL_YAML = """
working_days:
  - monday
  - tuesday
  - friday

holidays:
  - 2022-01-01
  - 2012-12-25

extra_working_dates:
  - 2022-01-08
"""


# ── parse_config ──────────────────────────────────────────────────────────────

class TestParseConfig:

    def test_none_gives_all_defaults(self):
        assert parse_config(None) == CalendarConfig()

    def test_missing_keys_stay_none(self):
        cfg = parse_config({"holidays": ["2022-01-01"]})
        assert cfg.working_days is None
        assert cfg.holidays == (date(2022, 1, 1),)
        assert cfg.extra_working_dates is None

    def test_weekday_names(self):
        cfg = parse_config({"working_days": ["monday", "Sat"]})
        assert cfg.working_days == (Weekday.MONDAY, Weekday.SATURDAY)

    def test_dates_and_strings(self):
        cfg = parse_config({"holidays": [date(2022, 1, 1), "2022-12-25"]})
        assert cfg.holidays == (date(2022, 1, 1), date(2022, 12, 25))

    def test_defaults_applied_on_build(self):
        cal = parse_config({}).to_calendar()
        assert cal == Calendar.workweek()

    def test_unknown_keys_ignored(self):
        cal = parse_config({"name": "uk", "holidays": []}).to_calendar()
        assert cal == Calendar.workweek()

    def test_empty_working_days_kept(self):
        cal = parse_config({"working_days": []}).to_calendar()
        assert cal.working_days == frozenset()

    def test_max_steps_passed_through(self):
        cal = parse_config({}).to_calendar(max_steps=10)
        assert cal.max_steps == 10

    @pytest.mark.parametrize(
        "data",
        [
            ["monday"],
            "monday",
            {"working_days": "monday"},
            {"holidays": {"xmas": "2022-12-25"}},
            {"working_days": ["moonday"]},
            {"working_days": [1]},
            {"holidays": ["25/12/2022"]},
            {"holidays": ["2022-13-01"]},
            {"extra_working_dates": [20220101]},
        ],
    )
    def test_malformed(self, data):
        with pytest.raises(ConfigParseError):
            parse_config(data)


# ── YAML ──────────────────────────────────────────────────────────────────────

class TestYaml:

    def test_full_document(self):
        cal = loads(FULL_YAML)
        expected = Calendar(
            [Weekday.MONDAY, Weekday.TUESDAY, Weekday.FRIDAY],
            [date(2022, 1, 1), date(2012, 12, 25)],
            [date(2022, 1, 8)],
        )
        assert cal == expected

    def test_defaults(self):
        cal = loads("holidays:\n  - 2022-01-01\n  - 2012-12-25\n")
        assert cal == Calendar.with_holidays([date(2022, 1, 1), date(2012, 12, 25)])
        assert cal.working_days == frozenset(WORKWEEK)

    def test_empty_document_is_workweek(self):
        assert loads("") == Calendar.workweek()

    def test_quoted_dates(self):
        cal = loads('holidays: ["2022-12-26"]')
        assert cal.holidays == {date(2022, 12, 26)}

    def test_overlap_rejected(self):
        text = "holidays: [2022-01-08]\nextra_working_dates: [2022-01-08]\n"
        with pytest.raises(ValidationError):
            loads(text)

    def test_invalid_yaml(self):
        with pytest.raises(ConfigParseError):
            loads("holidays: [2022-01-01")

    def test_calendar_from_yaml(self):
        assert Calendar.from_yaml(FULL_YAML) == loads(FULL_YAML)

    def test_subclass_preserved(self, tmp_path):
        class TradingCalendar(Calendar):
            pass

        path = tmp_path / "cal.yml"
        path.write_text(FULL_YAML, encoding="utf-8")
        assert type(TradingCalendar.from_yaml(FULL_YAML)) is TradingCalendar
        assert type(TradingCalendar.from_dict({})) is TradingCalendar
        assert type(TradingCalendar.load(path)) is TradingCalendar
        assert type(Calendar.from_dict({})) is Calendar

    def test_calendar_from_dict(self):
        cal = Calendar.from_dict({"holidays": [date(2017, 12, 25)]})
        assert cal.is_business_day(date(2017, 12, 25)) is False


# ── Files ─────────────────────────────────────────────────────────────────────

class TestLoadFile:

    def test_load(self, tmp_path):
        path = tmp_path / "cal.yml"
        path.write_text(FULL_YAML, encoding="utf-8")
        assert load(path) == loads(FULL_YAML)
        assert Calendar.load(str(path)) == loads(FULL_YAML)

    def test_delivery_example(self, tmp_path):
        path = tmp_path / "cal.yml"
        path.write_text(
            "holidays:\n  - 2017-12-25\n  - 2017-12-26\n", encoding="utf-8"
        )
        cal = load(path)
        last_business_day = cal.roll_backward(date(2017, 12, 25))
        assert last_business_day == date(2017, 12, 22)
        assert cal.add_business_days(last_business_day, 2) == date(2017, 12, 28)

    def test_error_names_file(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("working_days: [someday]\n", encoding="utf-8")
        with pytest.raises(ConfigParseError, match="bad.yml"):
            load(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load(tmp_path / "missing.yml")
