"""Tests for the location table."""

import pytest

from carbonwidget.models.location import REAL_LOCATIONS, Location


class TestLocation:
    def test_eleven_variants(self):
        assert len(Location) == 11
        assert len(REAL_LOCATIONS) == 10

    def test_default_aliases_france(self):
        assert Location.DEFAULT.short == "fr"
        assert Location.DEFAULT.long == "france continentale"
        assert Location.DEFAULT.resolved is Location.FRANCE_CONTINENTALE

    @pytest.mark.parametrize(
        ("location", "short", "long"),
        [
            (Location.BELGIUM, "be", "belgique"),
            (Location.AUSTRIA, "at", "österreich"),
            (Location.SPAIN, "es", "españa"),
            (Location.GUADELOUPE, "gp", "guadeloupe"),
            (Location.UNITED_KINGDOM, "uk", "united kingdom"),
        ],
    )
    def test_projections(self, location: Location, short: str, long: str):
        assert location.short == short
        assert location.long == long

    def test_short_codes_unique(self):
        codes = [loc.short for loc in REAL_LOCATIONS]
        assert len(set(codes)) == len(codes)


class TestFromCode:
    def test_short_code(self):
        assert Location.from_code("de") is Location.GERMANY

    def test_case_insensitive(self):
        assert Location.from_code("NL") is Location.NETHERLANDS

    def test_raw_value(self):
        assert Location.from_code(8) is Location.SWITZERLAND
        assert Location.from_code("8") is Location.SWITZERLAND

    def test_enum_name(self):
        assert Location.from_code("united-kingdom") is Location.UNITED_KINGDOM

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown location"):
            Location.from_code("xx")
