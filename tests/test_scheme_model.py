"""
Unit tests for scheme decoding
"""
import pytest

from sarkari_yojana.catalog import REFERENCE_SCHEMES
from sarkari_yojana.models.scheme import (
    ApplicationType,
    EligibilityStatus,
    Government,
    SchemeOrigin,
    SchemeStatus,
    decode_scheme,
    decode_schemes,
)


def test_decode_collaborator_shape(matched_scheme):
    result = decode_scheme(matched_scheme)
    assert result.ok
    scheme = result.scheme
    assert scheme.name == "Palanhar Yojana"
    assert scheme.government == Government.STATE
    assert scheme.eligibility_status == EligibilityStatus.ELIGIBLE
    assert scheme.application.application_type == ApplicationType.ONLINE
    assert scheme.application.official_link == "https://sje.rajasthan.gov.in"
    assert scheme.application.signatures_required == ["Guardian"]
    assert scheme.status == SchemeStatus.ACTIVE
    assert scheme.short_purpose.startswith("बच्चों")


def test_decode_rejects_missing_name():
    result = decode_scheme({"government": "Central Govt"})
    assert not result.ok
    assert result.error


def test_decode_rejects_blank_name():
    result = decode_scheme({"name": "   ", "government": "Central Govt"})
    assert not result.ok


def test_decode_rejects_non_object():
    result = decode_scheme(["not", "a", "scheme"])
    assert not result.ok
    assert "list" in result.error


def test_decode_normalizes_statuses():
    scheme = decode_scheme({
        "name": "Test",
        "government": "Central Govt",
        "eligibility_status": "NOT_ELIGIBLE",
        "scheme_status": "UPDATED",
        "application_type": "Online / Offline"
    }).scheme
    assert scheme.eligibility_status == EligibilityStatus.NOT_ELIGIBLE
    assert scheme.status == SchemeStatus.ACTIVE
    assert scheme.application.application_type == ApplicationType.BOTH


@pytest.mark.parametrize("wording, expected", [
    ("Conditionally Eligible", EligibilityStatus.CONDITIONAL),
    ("Partially Eligible", EligibilityStatus.CONDITIONAL),
    ("eligible", EligibilityStatus.ELIGIBLE),
    ("Likely Eligible", None),
    ("", None),
])
def test_unknown_eligibility_wording_keeps_record(wording, expected):
    result = decode_scheme({"name": "Test", "government": "Central Govt", "eligibility_status": wording})
    assert result.ok
    assert result.scheme.eligibility_status == expected


def test_decode_sets_origin():
    scheme = decode_scheme({"name": "Test", "government": "central"}, origin=SchemeOrigin.COLLABORATOR).scheme
    assert scheme.origin == SchemeOrigin.COLLABORATOR


def test_decode_schemes_drops_invalid(matched_scheme):
    schemes = decode_schemes([matched_scheme, {"government": "Central Govt"}, "junk"])
    assert [s.name for s in schemes] == ["Palanhar Yojana"]


def test_content_hash_ignores_bookkeeping(matched_scheme):
    scheme = decode_scheme(matched_scheme).scheme
    touched = scheme.model_copy(update={"hash_signature": "x", "status": SchemeStatus.EXPIRED})
    assert scheme.content_hash() == touched.content_hash()
    changed = scheme.model_copy(update={"detailed_benefits": "₹2,000 per month"})
    assert scheme.content_hash() != changed.content_hash()


def test_reference_catalog_is_valid():
    assert len(decode_schemes(REFERENCE_SCHEMES)) == len(REFERENCE_SCHEMES)


def test_context_projection(matched_scheme):
    scheme = decode_scheme(matched_scheme).scheme
    assert scheme.to_context() == {"name": "Palanhar Yojana", "eligibility": ["Child of a widow"]}
