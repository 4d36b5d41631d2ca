"""
Unit tests for the cache-first eligibility service
"""
import json
from datetime import timedelta

import httpx
import pytest

from conftest import make_delimited_reply, make_gemini_body
from sarkari_yojana.errors import CollaboratorError, MissingCredential
from sarkari_yojana.models.profile import UserProfile
from sarkari_yojana.models.scheme import Government, SchemeOrigin
from sarkari_yojana.services.eligibility_service import (
    CURRENT_PROFILE_KEY,
    DUMMY_MODE_SETTING,
    LAST_RESULT_KEY,
    EligibilityService,
)
from sarkari_yojana.services.reasoning_service import ReasoningClient


@pytest.fixture
def service(store, reasoning_client):
    return EligibilityService(store, reasoning_client)


@pytest.fixture
def answered(gemini_transport, matched_scheme):
    gemini_transport.replies.append(httpx.Response(
        200,
        json=make_gemini_body(make_delimited_reply("आप पालनहार योजना के पात्र हैं।", [matched_scheme]))
    ))
    return gemini_transport


async def test_identical_profiles_hit_the_cache(service, answered):
    profile = UserProfile(full_name="Kamla", district="Dungarpur", marital_status="Widowed")
    
    first = await service.analyze(profile)
    second = await service.analyze(UserProfile(full_name="Kamla", district="Dungarpur", marital_status="Widowed"))
    
    assert len(answered.requests) == 1
    assert not first.from_cache
    assert second.from_cache
    assert second.fingerprint == first.fingerprint
    assert second.response == first.response


async def test_changed_profile_misses_the_cache(service, answered):
    await service.analyze(UserProfile(district="Jaipur"))
    await service.analyze(UserProfile(district="Banswara"))
    assert len(answered.requests) == 2


async def test_refresh_bypasses_cache(service, answered):
    profile = UserProfile()
    await service.analyze(profile)
    outcome = await service.analyze(profile, use_cache=False)
    assert not outcome.from_cache
    assert len(answered.requests) == 2


async def test_stale_cache_entry_is_not_served(service, store, answered):
    profile = UserProfile()
    first = await service.analyze(profile)
    stale = first.response.model_copy(update={"created_at": first.response.created_at - timedelta(days=3)})
    await store.save_cache(first.fingerprint, stale)
    
    outcome = await service.analyze(profile, max_age=timedelta(days=1))
    assert not outcome.from_cache
    assert len(answered.requests) == 2
    
    outcome = await service.analyze(profile, max_age=timedelta(days=1))
    assert outcome.from_cache


async def test_analysis_persists_session_and_submission(service, store, answered):
    profile = UserProfile(full_name="Kamla")
    outcome = await service.analyze(profile)
    
    assert outcome.submission_seq == 1
    assert outcome.response.eligible_schemes[0].name == "Palanhar Yojana"
    assert outcome.response.eligible_schemes[0].origin == SchemeOrigin.COLLABORATOR
    
    restored_profile, restored_result = await service.restore_session()
    assert restored_profile == profile
    assert restored_result == outcome.response
    
    submissions = await store.list_submissions()
    assert [s.seq for s in submissions] == [1]
    assert submissions[0].fingerprint == outcome.fingerprint
    
    logs = await store.get_logs()
    assert logs[0].agent == "eligibility"
    assert logs[0].status == "success"


async def test_cache_hit_does_not_append_submission(service, store, answered):
    profile = UserProfile()
    await service.analyze(profile)
    outcome = await service.analyze(profile)
    assert outcome.submission_seq is None
    assert len(await store.list_submissions()) == 1


async def test_dummy_mode_persists_nothing(service, store, answered):
    await store.set_setting(DUMMY_MODE_SETTING, True)
    profile = UserProfile()
    
    outcome = await service.analyze(profile)
    assert outcome.submission_seq is None
    assert outcome.response.eligible_schemes
    
    assert await store.get_cache(outcome.fingerprint) is None
    assert await store.get_app_data(CURRENT_PROFILE_KEY) is None
    assert await store.get_app_data(LAST_RESULT_KEY) is None
    assert await store.list_submissions() == []
    
    await service.analyze(profile)
    assert len(answered.requests) == 2


async def test_missing_credential_is_logged_and_raised(store, test_settings, gemini_transport):
    client = ReasoningClient(store, config=test_settings, http_client=httpx.AsyncClient(transport=gemini_transport))
    service = EligibilityService(store, client)
    
    with pytest.raises(MissingCredential):
        await service.analyze(UserProfile())
    
    assert gemini_transport.requests == []
    logs = await store.get_logs()
    assert logs[0].status == "failed"
    assert await store.list_submissions() == []


async def test_collaborator_failure_leaves_cache_untouched(service, store, gemini_transport):
    gemini_transport.replies.append(httpx.Response(429, json={"error": {"message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}}))
    profile = UserProfile()
    
    with pytest.raises(CollaboratorError) as exc_info:
        await service.analyze(profile)
    assert exc_info.value.quota_exceeded
    assert await store.get_cache(profile.fingerprint()) is None


async def test_malformed_reply_still_returns_narrative(service, gemini_transport):
    gemini_transport.replies.append(httpx.Response(200, json=make_gemini_body("Only prose this time.")))
    outcome = await service.analyze(UserProfile())
    assert outcome.response.narrative == "Only prose this time."
    assert outcome.response.eligible_schemes == []
    assert outcome.response.parse_warning


async def test_save_and_restore_profile(service):
    assert await service.restore_session() == (None, None)
    profile = UserProfile(district="Sirohi")
    await service.save_profile(profile)
    restored, result = await service.restore_session()
    assert restored == profile
    assert restored.is_tsp_area == "Yes"
    assert result is None


async def test_refresh_catalog(service, store, gemini_transport, matched_scheme):
    new_scheme = dict(matched_scheme, yojana_name="Mukhyamantri Kanyadan Yojana")
    gemini_transport.replies.append(httpx.Response(200, json=make_gemini_body(json.dumps([matched_scheme, new_scheme]))))
    
    outcomes = await service.refresh_catalog(Government.STATE)
    
    assert outcomes == {"update": 1, "insert": 1}
    refreshed = await store.get_scheme("Palanhar Yojana")
    assert refreshed.origin == SchemeOrigin.COLLABORATOR
    assert refreshed.eligibility_status is not None
    assert (await store.get_scheme("Mukhyamantri Kanyadan Yojana")) is not None
    
    logs = await store.get_logs()
    assert logs[0].agent == "catalog"
    assert logs[0].action == "refresh_state"
