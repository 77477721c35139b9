import copy

import pytest

from ne2json.domain.enums import Continent
from ne2json.pipeline.identity import IdentityNormalizer


@pytest.fixture
def normalizer(tables):
    return IdentityNormalizer(tables)


class TestNames:
    def test_english_prefers_long_form(self, normalizer):
        props = {"NAME": "Bosnia and Herz.", "NAME_LONG": "Bosnia and Herzegovina", "ADMIN": "Bosnia"}
        assert normalizer.normalize(props).name_english == "Bosnia and Herzegovina"

    def test_english_falls_back_to_name_then_admin(self, normalizer):
        assert normalizer.normalize({"NAME": "Chad", "ADMIN": "Republic of Chad"}).name_english == "Chad"
        assert normalizer.normalize({"ADMIN": "Republic of Chad"}).name_english == "Republic of Chad"

    def test_blank_fields_are_skipped(self, normalizer):
        assert normalizer.normalize({"NAME_LONG": "  ", "NAME": "Peru"}).name_english == "Peru"

    def test_explicit_localized_field_wins(self, normalizer):
        identity = normalizer.normalize({"NAME": "Japan", "NAME_ZH": "日本国"})
        assert identity.name_display == "日本国"

    def test_localized_table_lookup(self, normalizer):
        assert normalizer.normalize({"NAME": "Japan"}).name_display == "日本"

    def test_table_lookup_uses_short_name_when_long_form_unknown(self, normalizer):
        identity = normalizer.normalize({"NAME": "Japan", "NAME_LONG": "State of Japan"})
        assert identity.name_display == "日本"

    def test_display_falls_back_to_english(self, normalizer):
        identity = normalizer.normalize({"NAME": "Atlantis"})
        assert identity.name_display == "Atlantis"

    def test_other_locale_reads_its_own_field(self, tables):
        french = IdentityNormalizer(tables, display_locale="fr")
        assert french.normalize({"NAME": "Japan", "NAME_FR": "Japon"}).name_display == "Japon"
        assert french.normalize({"NAME": "Japan"}).name_display == "Japan"

    def test_local_name(self, normalizer):
        identity = normalizer.normalize({"NAME": "Korea", "NAME_LONG": "Republic of Korea"})
        assert identity.name_local == "Republic of Korea"
        assert normalizer.normalize({"ADMIN": "Fiji"}).name_local == "Fiji"


class TestCodes:
    def test_code_is_stripped_and_upper_cased(self, normalizer):
        assert normalizer.normalize({"ISO_A2": " jp ", "NAME": "Japan"}).iso_code == "JP"

    @pytest.mark.parametrize("props,expected", [
        ({"ISO_A2": "-99", "NAME": "France"}, "FR"),
        ({"ISO_A2": "-99", "NAME": "Norway"}, "NO"),
        ({"ISO_A2": "-99", "NAME_ZH": "法国"}, "FR"),
        ({"ISO_A2": "-99", "NAME": "Kingdom of Norway", "NAME_ZH": "挪威"}, "NO"),
        ({"ISO_A2": "-99", "NAME_LONG": "French Republic", "NAME_EN": "France"}, "FR"),
    ])
    def test_sentinel_repair(self, normalizer, props, expected):
        assert normalizer.resolve_code(props) == expected
        assert normalizer.normalize(props).iso_code == expected

    def test_unrepairable_sentinel_is_kept(self, normalizer):
        assert normalizer.resolve_code({"ISO_A2": "-99", "NAME": "Somaliland"}) == "-99"

    def test_repair_is_exact_match_only(self, normalizer):
        assert normalizer.resolve_code({"ISO_A2": "-99", "NAME": "france"}) == "-99"

    def test_repair_only_applies_to_sentinel(self, normalizer):
        assert normalizer.resolve_code({"ISO_A2": "GF", "NAME": "France"}) == "GF"

    def test_iso3(self, normalizer):
        assert normalizer.normalize({"ISO_A3": "jpn"}).iso_code3 == "JPN"
        assert normalizer.normalize({"ISO_A3": "-99"}).iso_code3 is None
        assert normalizer.normalize({}).iso_code3 is None

    @pytest.mark.parametrize("value,expected", [
        ("392", "392"), (4, "004"), ("-99", None), (-99, None), (None, None), ("", None),
    ])
    def test_un_code(self, normalizer, value, expected):
        assert normalizer.normalize({"UN_A3": value}).un_code == expected


class TestContinent:
    @pytest.mark.parametrize("code,continent", [
        ("JP", Continent.ASIA),
        ("NO", Continent.EUROPE),
        ("CY", Continent.EUROPE),
        ("KE", Continent.AFRICA),
        ("US", Continent.NORTH_AMERICA),
        ("BR", Continent.SOUTH_AMERICA),
        ("FJ", Continent.OCEANIA),
        ("TW", Continent.ASIA),
        ("ZZ", Continent.UNKNOWN),
    ])
    def test_lookup(self, normalizer, code, continent):
        assert normalizer.normalize({"ISO_A2": code}).continent == continent

    def test_continent_uses_repaired_code(self, normalizer):
        assert normalizer.normalize({"ISO_A2": "-99", "NAME": "France"}).continent == Continent.EUROPE

    def test_every_member_has_a_continent(self, tables):
        assert all(tables.continent_for(code) != "Unknown" for code in tables.un_members)


class TestTotality:
    @pytest.mark.parametrize("props", [None, {}, {"NAME": 42, "ISO_A2": 7}, "junk"])
    def test_never_raises(self, normalizer, props):
        identity = normalizer.normalize(props)
        assert identity.name_english == "Unknown"
        assert identity.name_display == "Unknown"
        assert identity.name_local == "Unknown"
        assert identity.iso_code == ""
        assert identity.continent == Continent.UNKNOWN

    def test_input_is_not_mutated(self, normalizer, norway):
        props = norway["properties"]
        before = copy.deepcopy(props)
        normalizer.normalize(props)
        assert props == before

    def test_repeated_calls_are_identical(self, normalizer, japan):
        first = normalizer.normalize(japan["properties"])
        second = normalizer.normalize(japan["properties"])
        assert first.model_dump_json() == second.model_dump_json()
