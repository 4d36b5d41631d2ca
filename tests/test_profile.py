"""
Unit tests for UserProfile derivation and fingerprinting
"""
import pytest

from sarkari_yojana.models.profile import UserProfile, demo_profile


def test_tsp_district_sets_flag():
    profile = UserProfile(state="Rajasthan", district="Udaipur")
    assert profile.is_tsp_area == "Yes"


def test_non_tsp_district_clears_flag():
    profile = UserProfile(state="Rajasthan", district="Jaipur")
    assert profile.is_tsp_area == "No"


def test_flag_not_user_editable_while_rule_active():
    profile = UserProfile(state="Rajasthan", district="Jaipur", is_tsp_area="Yes")
    assert profile.is_tsp_area == "No"
    assert profile.tsp_rule_active


def test_flag_recomputed_on_district_change():
    profile = UserProfile(state="Rajasthan", district="Jaipur")
    moved = profile.updated(district="Banswara")
    assert moved.is_tsp_area == "Yes"
    assert profile.is_tsp_area == "No"
    assert moved.updated(district="Kota").is_tsp_area == "No"


def test_flag_editable_outside_rule_state():
    profile = UserProfile(state="Central", district="Udaipur", is_tsp_area="No")
    assert profile.is_tsp_area == "No"
    assert not profile.tsp_rule_active
    assert profile.updated(is_tsp_area="Yes").is_tsp_area == "Yes"


def test_flag_recomputed_on_state_change():
    profile = UserProfile(state="Central", district="Udaipur", is_tsp_area="No")
    assert profile.updated(state="Rajasthan").is_tsp_area == "Yes"


def test_updated_rejects_unknown_field():
    with pytest.raises(ValueError):
        UserProfile().updated(favourite_colour="orange")


def test_numbers_and_booleans_are_kept_as_strings():
    profile = UserProfile(age=34, family_count=5, is_farmer=True)
    assert profile.age == "34"
    assert profile.family_count == "5"
    assert profile.is_farmer == "Yes"


def test_fingerprint_equal_for_equal_profiles():
    a = UserProfile(full_name="Sita Devi", district="Banswara", category="ST")
    b = UserProfile(category="ST", district="Banswara", full_name="Sita Devi")
    assert a is not b
    assert a.fingerprint() == b.fingerprint()


def test_fingerprint_changes_with_any_field():
    base = UserProfile()
    seen = {base.fingerprint()}
    for field in ("full_name", "income", "category", "pregnant", "children_after_cutoff"):
        changed = base.updated(**{field: "something else"})
        seen.add(changed.fingerprint())
    assert len(seen) == 6


def test_fingerprint_covers_derived_flag():
    jaipur = UserProfile(district="Jaipur")
    udaipur = UserProfile(district="Udaipur")
    assert jaipur.fingerprint() != udaipur.fingerprint()


def test_accepts_camel_case_name():
    assert UserProfile.model_validate({"fullName": "Ramesh"}).full_name == "Ramesh"


def test_demo_profile_is_tribal_area():
    profile = demo_profile()
    assert profile.district == "Banswara"
    assert profile.is_tsp_area == "Yes"
    assert profile.category == "ST"


def test_derived_signals():
    signals = UserProfile(district="Dungarpur", children_before_cutoff="2", children_after_cutoff="1").derived_signals()
    assert signals["tribal_sub_plan_area"] == "Yes"
    assert signals["children_before_cutoff"] == "2"
    assert signals["children_after_cutoff"] == "1"
    assert "jan_aadhaar_status" in signals
    assert "is_studying" in signals
