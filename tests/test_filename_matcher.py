"""Tests for filename convention matching."""

import datetime
import pathlib

from conftest import UTC
from filename_matcher import FilenameConventionMatcher


def matcher(**kwargs) -> FilenameConventionMatcher:
    kwargs.setdefault("timezone", UTC)
    return FilenameConventionMatcher(**kwargs)


class TestExportCode:
    def test_epoch_is_converted_in_the_given_zone(self):
        # 1680307200 is 2023-04-01 00:00:00 UTC
        result = matcher().match_export(pathlib.Path("/inbox/mmexport1680307200.jpg"))
        assert result == datetime.datetime(2023, 4, 1, 0, 0, tzinfo=UTC)

    def test_local_zone_can_shift_the_month(self):
        new_york_winter = datetime.timezone(datetime.timedelta(hours=-4))
        result = matcher(timezone=new_york_winter).match_export(pathlib.Path("mmexport1680307200.jpg"))
        assert (result.year, result.month, result.day) == (2023, 3, 31)

    def test_code_may_appear_anywhere_in_the_name(self):
        result = matcher().match_export(pathlib.Path("copy of mmexport1680307200123_edited.jpg"))
        assert result == datetime.datetime(2023, 4, 1, 0, 0, tzinfo=UTC)

    def test_epoch_must_start_with_one(self):
        assert matcher().match_export(pathlib.Path("mmexport2680307200.jpg")) is None

    def test_too_few_digits(self):
        assert matcher().match_export(pathlib.Path("mmexport168030720.jpg")) is None

    def test_only_basename_is_inspected(self):
        assert matcher().match_export(pathlib.Path("/mmexport1680307200/photo.jpg")) is None


class TestNamedTimestamp:
    def test_underscore_layout(self):
        result = matcher().match_timestamp(pathlib.Path("IMG_20230415_103000.jpg"))
        assert result == datetime.datetime(2023, 4, 15, 10, 30, 0)

    def test_dotted_layout(self):
        result = matcher().match_timestamp(pathlib.Path("2022-12-31 23.59.58.png"))
        assert result == datetime.datetime(2022, 12, 31, 23, 59, 58)

    def test_invalid_date_falls_through_to_next_pattern(self):
        # first pattern matches text that is not a date, second pattern parses
        name = pathlib.Path("99999999_999999 2021-06-01 08.00.00.jpg")
        assert matcher().match_timestamp(name) == datetime.datetime(2021, 6, 1, 8, 0, 0)

    def test_invalid_date_without_alternative(self):
        assert matcher().match_timestamp(pathlib.Path("20231399_250000.jpg")) is None

    def test_declaration_order_decides(self):
        name = pathlib.Path("2021-06-01 08.00.00 20230415_103000.jpg")

        default_order = matcher()
        reversed_order = matcher(
            timestamp_patterns=[
                (r"\d{4}-\d{2}-\d{2} \d{2}\.\d{2}\.\d{2}", "%Y-%m-%d %H.%M.%S"),
                (r"\d{8}_\d{6}", "%Y%m%d_%H%M%S"),
            ]
        )

        assert default_order.match_timestamp(name) == datetime.datetime(2023, 4, 15, 10, 30, 0)
        assert reversed_order.match_timestamp(name) == datetime.datetime(2021, 6, 1, 8, 0, 0)

    def test_repeated_matching_is_stable(self):
        name = pathlib.Path("2021-06-01 08.00.00 20230415_103000.jpg")
        m = matcher()
        assert len({m.match_timestamp(name) for _ in range(20)}) == 1

    def test_no_match(self):
        assert matcher().match_timestamp(pathlib.Path("holiday.jpg")) is None


class TestMatch:
    def test_export_code_takes_precedence(self):
        result = matcher().match(pathlib.Path("mmexport1680307200_20200101_120000.jpg"))
        assert result == datetime.datetime(2023, 4, 1, 0, 0, tzinfo=UTC)

    def test_falls_back_to_timestamp(self):
        assert matcher().match(pathlib.Path("20200101_120000.jpg")) == datetime.datetime(2020, 1, 1, 12, 0, 0)

    def test_nothing_matches(self):
        assert matcher().match(pathlib.Path("DSC_0042.jpg")) is None
