"""
Pytest configuration and fixtures
"""
import json

import httpx
import pytest
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

from sarkari_yojana.config import Settings
from sarkari_yojana.services.reasoning_service import JSON_END, JSON_START, ReasoningClient
from sarkari_yojana.services.store_service import LocalStore


def make_gemini_body(text, sources=None):
    candidate = {"content": {"role": "model", "parts": [{"text": text}]}}
    if sources:
        candidate["groundingMetadata"] = {
            "groundingChunks": [{"web": {"uri": uri, "title": title}} for uri, title in sources]
        }
    return {"candidates": [candidate], "usageMetadata": {"totalTokenCount": 42}}


def make_delimited_reply(narrative, schemes):
    return f"{narrative}\n{JSON_START}\n{json.dumps({'eligible_schemes': schemes}, ensure_ascii=False)}\n{JSON_END}"


class _LostCollection:
    async def find_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: connection closed")


class LostDatabase:
    """Database handle whose server went away after the store was opened"""
    
    def __getitem__(self, name):
        return _LostCollection()


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, gemini_api_key="", reasoning_use_search=True, reasoning_structured_output=False)


@pytest.fixture
def keyed_settings():
    return Settings(_env_file=None, gemini_api_key="process-default-key", reasoning_use_search=True)


@pytest.fixture
def mongo_client():
    return AsyncMongoMockClient()


@pytest.fixture
async def store(mongo_client, test_settings):
    """Initialized store seeded with the reference catalog"""
    store = LocalStore(client=mongo_client, db_name="yojana_test", config=test_settings)
    await store.init()
    return store


@pytest.fixture
def matched_scheme():
    return {
        "yojana_name": "Palanhar Yojana",
        "government": "Rajasthan Govt",
        "category": "Child Welfare",
        "short_purpose_hindi": "बच्चों के पालन-पोषण हेतु सहायता",
        "detailed_benefits": "₹1,500 per month per child",
        "eligibility": ["Child of a widow"],
        "eligibility_status": "ELIGIBLE",
        "eligibility_reason_hindi": "आप विधवा हैं",
        "required_documents": ["Jan Aadhaar Card"],
        "form_source": "e-Mitra",
        "application_type": "Online",
        "signatures_required": ["Guardian"],
        "submission_point": "e-Mitra",
        "official_pdf_link": "https://sje.rajasthan.gov.in",
        "scheme_status": "ACTIVE"
    }


@pytest.fixture
def gemini_transport():
    """
    MockTransport answering every request with the queued replies.
    
    Append httpx.Response objects to ``transport.replies``; sent requests
    are recorded in ``transport.requests``.
    """
    replies = []
    requests = []
    
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if not replies:
            return httpx.Response(500, json={"error": {"message": "no reply queued"}})
        return replies.pop(0) if len(replies) > 1 else replies[0]
    
    transport = httpx.MockTransport(handler)
    transport.replies = replies
    transport.requests = requests
    return transport


@pytest.fixture
def reasoning_client(store, keyed_settings, gemini_transport):
    http_client = httpx.AsyncClient(transport=gemini_transport)
    return ReasoningClient(store, config=keyed_settings, http_client=http_client)
