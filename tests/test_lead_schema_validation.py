import pytest
from pydantic import ValidationError

from app.schemas.common import LeadStatus
from app.schemas.lead import LeadOut, LeadStatusUpdate, LeadSubmission

from tests.factories import make_lead


VALID = {
    "vaName": "Amara",
    "make": "Vauxhall",
    "model": "Corsa",
    "year": 2012,
    "mileage": 102000,
    "askingPrice": 900,
    "estimatedSalePrice": 1450,
    "estimatedExpenses": 150,
    "sellerName": "Sue",
    "location": "Worcester",
    "listingUrl": "https://example.com/corsa",
    "conditionNotes": "Minor scuffs",
    "goodDealReason": "Quick sale needed",
}


def _errors_for(payload) -> list:
    with pytest.raises(ValidationError) as exc:
        LeadSubmission.model_validate(payload)
    return exc.value.errors()


class TestLeadSubmission:
    def test_valid_payload(self):
        sub = LeadSubmission.model_validate(VALID)
        assert sub.asking_price == 900
        assert sub.conditions is None
        assert sub.honeypot is None

    def test_expenses_default_to_zero(self):
        payload = {k: v for k, v in VALID.items() if k != "estimatedExpenses"}
        assert LeadSubmission.model_validate(payload).estimated_expenses == 0

    def test_year_before_2010_rejected(self):
        errors = _errors_for({**VALID, "year": 2009})
        assert errors[0]["loc"] == ("year",)
        assert "Year must be 2010 or newer" in errors[0]["msg"]

    def test_year_2010_accepted(self):
        assert LeadSubmission.model_validate({**VALID, "year": 2010}).year == 2010

    def test_asking_price_above_cap_rejected(self):
        errors = _errors_for({**VALID, "askingPrice": 3001})
        assert "Asking price must be £3,000 or less" in errors[0]["msg"]

    def test_asking_price_at_cap_accepted(self):
        assert LeadSubmission.model_validate({**VALID, "askingPrice": 3000})

    def test_asking_price_below_one_rejected(self):
        errors = _errors_for({**VALID, "askingPrice": 0})
        assert "Asking price must be at least £1" in errors[0]["msg"]

    def test_sale_price_must_be_positive(self):
        _errors_for({**VALID, "estimatedSalePrice": 0})

    def test_negative_mileage_rejected(self):
        _errors_for({**VALID, "mileage": -1})

    def test_listing_url_must_be_a_url(self):
        errors = _errors_for({**VALID, "listingUrl": "not a url"})
        assert errors[0]["loc"] == ("listingUrl",)

    def test_listing_url_kept_as_sent(self):
        sub = LeadSubmission.model_validate({**VALID, "listingUrl": "https://example.com"})
        assert sub.listing_url == "https://example.com"

    def test_listing_url_must_be_http(self):
        errors = _errors_for({**VALID, "listingUrl": "ftp://example.com/corsa"})
        assert "Listing URL must be a valid http or https URL" in errors[0]["msg"]

    @pytest.mark.parametrize(
        "field", ["make", "model", "sellerName", "location", "conditionNotes"]
    )
    def test_required_text_fields(self, field):
        _errors_for({k: v for k, v in VALID.items() if k != field})

    def test_client_cannot_supply_estimates(self):
        sub = LeadSubmission.model_validate(
            {**VALID, "estimatedProfit": 99999, "estimatedCommission": 99999}
        )
        assert not hasattr(sub, "estimated_profit")


class TestLeadStatusUpdate:
    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            LeadStatusUpdate.model_validate({"status": "SHIPPED"})

    def test_lowercase_status_rejected(self):
        with pytest.raises(ValidationError):
            LeadStatusUpdate.model_validate({"status": "sold"})

    def test_negative_sale_price_rejected(self):
        with pytest.raises(ValidationError):
            LeadStatusUpdate.model_validate({"status": "SOLD", "actualSalePrice": -1})

    def test_zero_sale_price_reaches_the_service(self):
        update = LeadStatusUpdate.model_validate(
            {"status": "SOLD", "actualSalePrice": 0}
        )
        assert update.actual_sale_price == 0

    def test_camel_case_body(self):
        update = LeadStatusUpdate.model_validate(
            {"status": "SOLD", "actualSalePrice": 2000, "actualExpenses": 150}
        )
        assert update.status is LeadStatus.SOLD
        assert update.actual_sale_price == 2000
        assert update.actual_expenses == 150


class TestLeadOut:
    def test_serialises_with_camel_case_and_va(self):
        lead = make_lead(conditions=None)
        out = LeadOut.model_validate(lead).model_dump(by_alias=True, mode="json")
        assert out["askingPrice"] == 1500
        assert out["estimatedCommission"] == 60
        assert out["va"]["name"] == "Amara"
        assert out["conditions"] == []
        assert out["actualSalePrice"] is None
        assert out["status"] == "PENDING"
