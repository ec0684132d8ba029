import pytest

from app.services.condition_validator import (
    is_honeypot_clean,
    location_in_regions,
    parse_allowed_regions,
    validate_conditions,
)


class TestValidateConditions:
    def test_minor_issues_are_accepted(self):
        result = validate_conditions(["dead_battery", "flat_tyre"])
        assert result.valid is True
        assert result.errors == []

    def test_single_major_issue(self):
        result = validate_conditions(["engine_knock"])
        assert result.valid is False
        assert result.errors == [
            "Major issues detected: engine_knock. These cannot be accepted."
        ]

    def test_major_issues_listed_in_input_order(self):
        result = validate_conditions(["severe_rust", "dead_battery", "engine_knock"])
        assert result.valid is False
        assert result.errors == [
            "Major issues detected: severe_rust, engine_knock. These cannot be accepted."
        ]

    @pytest.mark.parametrize("conditions", [None, []])
    def test_missing_conditions_are_valid(self, conditions):
        result = validate_conditions(conditions)
        assert result.valid is True
        assert result.errors == []

    def test_unknown_identifiers_are_ignored(self):
        assert validate_conditions(["squeaky_brakes"]).valid is True

    @pytest.mark.parametrize(
        "issue", ["engine_knock", "gearbox_failure", "severe_rust", "accident_damage"]
    )
    def test_every_major_issue_is_rejected(self, issue):
        assert validate_conditions([issue]).valid is False


class TestHoneypot:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_is_clean(self, value):
        assert is_honeypot_clean(value) is True

    def test_filled_in_is_spam(self):
        assert is_honeypot_clean("buy cheap watches") is False


class TestAllowedRegions:
    def test_default_setting(self):
        assert parse_allowed_regions("Hereford or Worcester, UK") == [
            "Hereford",
            "Worcester",
        ]

    def test_other_separators(self):
        assert parse_allowed_regions("Gloucester; Hereford / Ledbury") == [
            "Gloucester",
            "Hereford",
            "Ledbury",
        ]

    def test_or_inside_a_place_name_is_kept(self):
        assert parse_allowed_regions("Oxford, Worcester") == ["Oxford", "Worcester"]

    @pytest.mark.parametrize("value", [None, "", "  "])
    def test_blank_setting_gives_no_regions(self, value):
        assert parse_allowed_regions(value) == []

    def test_location_substring_match(self):
        regions = ["Hereford", "Worcester"]
        assert location_in_regions("Hereford, UK", regions) is True
        assert location_in_regions("5 miles outside worcester", regions) is True
        assert location_in_regions("Bristol", regions) is False

    def test_no_regions_allows_any_location(self):
        assert location_in_regions("Anywhere", []) is True

    @pytest.mark.parametrize(
        "value,expected",
        [("UK", ["UK"]), ("NYC", ["NYC"]), ("NY or LA", ["NY", "LA"])],
    )
    def test_short_names_kept_when_nothing_else_remains(self, value, expected):
        assert parse_allowed_regions(value) == expected

    @pytest.mark.parametrize("value", ["UK", "NYC", "NY or LA"])
    def test_short_region_names_still_restrict_location(self, value):
        assert location_in_regions("Paris", parse_allowed_regions(value)) is False

    def test_short_region_name_matches_location(self):
        assert location_in_regions("Brooklyn, NY", parse_allowed_regions("NY or LA"))
