"""
Reasoning collaborator client and the eligibility request/response contract

Reply sub-protocol v1: a narrative for the user, then a structured segment
between JSON_START and JSON_END holding {"eligible_schemes": [...]}.
When structured output is enabled the whole reply is instead one JSON
object {"narrative": ..., "eligible_schemes": [...]}; the delimiter form
is still accepted as a fallback.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from ..config import Settings, settings
from ..errors import CollaboratorError, MalformedResponse, MissingCredential
from ..models.analysis import AnalysisResponse, EligibilityRequest, GroundingSource
from ..models.profile import UserProfile
from ..models.scheme import Government, Scheme, SchemeOrigin, decode_schemes

logger = logging.getLogger(__name__)

RESPONSE_PROTOCOL_VERSION = 1
JSON_START = "---JSON_START---"
JSON_END = "---JSON_END---"

API_KEYS_SETTING = "api_keys"

SCHEME_JSON_FORMAT = """{
  "name": string,
  "government": "Rajasthan Govt" | "Central Govt",
  "category": string,
  "applicable_area": string,
  "beneficiary_type": string[],
  "caste_category": string[],
  "short_purpose": string (simple Hindi),
  "detailed_benefits": string,
  "eligibility": string[],
  "eligibility_status": "ELIGIBLE" | "NOT_ELIGIBLE" | "CONDITIONAL",
  "eligibility_reason": string (simple Hindi),
  "required_documents": string[],
  "form_source": string,
  "application_type": "online" | "offline" | "both" | "automatic",
  "signatures_required": string[],
  "submission_point": string,
  "official_link": string,
  "status": "NEW" | "ACTIVE" | "EXPIRED"
}"""

SYSTEM_INSTRUCTION = f"""You are a government welfare scheme assistant for Indian citizens.
You find verified scheme data on official portals (Jan Soochna, MyScheme, department sites),
decide which schemes a citizen qualifies for, and explain the result in simple Hindi bullet points.

Every scheme you output must follow this JSON format exactly:
{SCHEME_JSON_FORMAT}

Priority: Rajasthan Govt schemes first, then Central Govt.
Give special attention to Tribal Sub Plan (TSP) areas of Rajasthan.
Never output the same scheme twice."""

ANALYSIS_PROMPT_TEMPLATE = """Analyze welfare scheme eligibility for this citizen.

PROFILE (JSON):
{profile_json}

SIGNALS TO WEIGH EXPLICITLY (JSON):
{signals_json}

KNOWN SCHEMES (name and eligibility criteria only, JSON):
{schemes_json}

INSTRUCTIONS:
1. Identify ALL Rajasthan and Central schemes the citizen is eligible or conditionally eligible for.
2. When one condition matches (e.g. widow, ST, TSP area), include every scheme sharing that condition.
3. Apply the two-child norm using the children born before and after the cutoff date.
4. Mark schemes that need a missing document as CONDITIONAL.
{output_instructions}"""

DELIMITED_OUTPUT_INSTRUCTIONS = """
Start with a short summary in simple Hindi explaining WHY the citizen is eligible.
Then return the matches in exactly this format:
{start}
{{ "eligible_schemes": [ ...scheme objects... ] }}
{end}""".format(start=JSON_START, end=JSON_END)

STRUCTURED_OUTPUT_INSTRUCTIONS = """
Return ONE JSON object only:
{ "narrative": "<short summary in simple Hindi>", "eligible_schemes": [ ...scheme objects... ] }"""

MASTER_SCHEMES_PROMPT_TEMPLATE = """Extract up to {count} verified {label} government welfare schemes that are currently active.
Include Tribal Sub Plan (TSP) area schemes where they exist.
Output ONLY a raw JSON array of scheme objects in the required format."""


class GenerationResult(BaseModel):
    """Raw reply from the reasoning collaborator"""
    text: str = ""
    grounding_sources: List[GroundingSource] = Field(default_factory=list)


def build_eligibility_request(profile: UserProfile, schemes: List[Scheme]) -> EligibilityRequest:
    """
    Build the context payload for an eligibility analysis
    
    Only the name and criteria of each known scheme are sent, to keep the
    payload small.
    """
    return EligibilityRequest(
        profile=profile.model_dump(),
        scheme_context=[scheme.to_context() for scheme in schemes],
        signals=profile.derived_signals()
    )


def render_analysis_prompt(request: EligibilityRequest, structured: bool = False) -> str:
    return ANALYSIS_PROMPT_TEMPLATE.format(
        profile_json=json.dumps(request.profile, ensure_ascii=False, indent=2),
        signals_json=json.dumps(request.signals, ensure_ascii=False, indent=2),
        schemes_json=json.dumps(request.scheme_context, ensure_ascii=False),
        output_instructions=STRUCTURED_OUTPUT_INSTRUCTIONS if structured else DELIMITED_OUTPUT_INSTRUCTIONS
    )


def extract_narrative(text: str) -> str:
    """Everything before the opening delimiter"""
    return text.split(JSON_START)[0].strip()


def extract_structured_segment(text: str) -> Dict[str, Any]:
    """
    Parse the JSON object between the delimiters
    
    Raises:
        MalformedResponse: delimiters are missing or the segment is not a JSON object
    """
    match = re.search(re.escape(JSON_START) + r"(.*?)" + re.escape(JSON_END), text, re.DOTALL)
    if not match:
        raise MalformedResponse("Structured segment delimiters not found in reply")
    
    segment = match.group(1).strip()
    # Models sometimes wrap the segment in a markdown code fence
    fence = re.match(r"^```(?:json)?\s*(.*?)\s*```$", segment, re.DOTALL)
    if fence:
        segment = fence.group(1)
    
    try:
        data = json.loads(segment)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"Structured segment is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedResponse("Structured segment must be a JSON object")
    return data


def _parse_structured_reply(text: str) -> Optional[Dict[str, Any]]:
    candidate = text.strip()
    fence = re.match(r"^```(?:json)?\s*(.*?)\s*```$", candidate, re.DOTALL)
    if fence:
        candidate = fence.group(1)
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def parse_analysis_text(
    text: str,
    grounding_sources: Optional[List[GroundingSource]] = None,
    structured: bool = False
) -> AnalysisResponse:
    """
    Turn a collaborator reply into an AnalysisResponse without raising
    
    A missing or unreadable structured part leaves the narrative intact,
    yields an empty match list and records a parse warning.
    """
    grounding_sources = grounding_sources or []
    
    if structured:
        data = _parse_structured_reply(text)
        if data is not None:
            raw = data.get("eligible_schemes") or []
            if isinstance(raw, list):
                return AnalysisResponse(
                    narrative=str(data.get("narrative") or "").strip(),
                    eligible_schemes=decode_schemes(raw, origin=SchemeOrigin.COLLABORATOR),
                    grounding_sources=grounding_sources
                )
        logger.info("Structured reply not usable, falling back to delimited format")
    
    warning = None
    raw_schemes = []
    try:
        data = extract_structured_segment(text)
        raw_schemes = data.get("eligible_schemes") or []
        if not isinstance(raw_schemes, list):
            raise MalformedResponse("eligible_schemes must be a list")
    except MalformedResponse as e:
        logger.warning(f"Malformed eligibility reply: {e}")
        warning = str(e)
        raw_schemes = []
    
    return AnalysisResponse(
        narrative=extract_narrative(text),
        eligible_schemes=decode_schemes(raw_schemes, origin=SchemeOrigin.COLLABORATOR),
        grounding_sources=grounding_sources,
        parse_warning=warning
    )


def extract_json_array(text: str) -> List[Any]:
    """
    Parse the outermost JSON array in a reply
    
    Raises:
        MalformedResponse: no array found or it does not parse
    """
    match = re.search(r"\[.*\]", text, re.DOTALL)
    if not match:
        raise MalformedResponse("No JSON array found in reply")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"Scheme array is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise MalformedResponse("Expected a JSON array of schemes")
    return data


async def resolve_api_key(store, config: Settings = settings) -> str:
    """
    Credential lookup: admin-configured key first, then the process default
    
    Raises:
        MissingCredential: neither is set
    """
    stored = await store.get_setting(API_KEYS_SETTING)
    if isinstance(stored, dict):
        key = (stored.get("gemini") or "").strip()
        if key:
            return key
    key = (config.gemini_api_key or "").strip()
    if key:
        return key
    raise MissingCredential()


def _error_from_response(response: httpx.Response) -> CollaboratorError:
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    error = body.get("error", {}) if isinstance(body, dict) else {}
    if not isinstance(error, dict):
        error = {"message": str(error)}
    message = str(error.get("message") or response.text[:500])
    reason = str(error.get("status", ""))
    
    lowered = message.lower()
    quota = status == 429 or reason == "RESOURCE_EXHAUSTED" or "quota" in lowered or "rate limit" in lowered
    credential = status in (401, 403) or "API_KEY_INVALID" in response.text or "api key" in lowered
    return CollaboratorError(
        f"Reasoning service error {status}: {message}",
        status_code=status,
        quota_exceeded=quota,
        credential_rejected=credential
    )


class ReasoningClient:
    """Client for the Gemini generateContent API"""
    
    def __init__(self, store, config: Settings = settings, http_client: Optional[httpx.AsyncClient] = None):
        self.store = store
        self.settings = config
        self.base_url = config.gemini_base_url.rstrip("/")
        self.model = config.gemini_model
        
        self.client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.reasoning_timeout_seconds),
            headers={"Content-Type": "application/json"}
        )
    
    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
    
    @property
    def json_mode(self) -> bool:
        # Search grounding and JSON response mode cannot be combined
        return self.settings.reasoning_structured_output and not self.settings.reasoning_use_search
    
    async def generate(
        self,
        system_instruction: str,
        prompt: str,
        use_search: bool = False,
        json_mode: bool = False
    ) -> GenerationResult:
        """
        Send one prompt to the collaborator
        
        Raises:
            MissingCredential: no API key configured
            CollaboratorError: the call failed or was rejected
        """
        api_key = await resolve_api_key(self.store, self.settings)
        
        payload = {
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0.2}
        }
        if use_search:
            payload["tools"] = [{"google_search": {}}]
        if json_mode:
            payload["generationConfig"]["responseMimeType"] = "application/json"
        
        logger.info(f"Sending request to reasoning service with model: {self.model}")
        try:
            response = await self.client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                json=payload,
                headers={"x-goog-api-key": api_key}
            )
        except httpx.TimeoutException as e:
            logger.error("Reasoning service request timed out")
            raise CollaboratorError("Reasoning service request timed out", status_code=408) from e
        except httpx.RequestError as e:
            logger.error(f"Reasoning service request failed: {e}")
            raise CollaboratorError(f"Reasoning service request failed: {e}") from e
        
        if response.status_code != 200:
            error = _error_from_response(response)
            logger.error(str(error))
            raise error
        
        try:
            data = response.json()
        except ValueError as e:
            raise CollaboratorError("Reasoning service returned a non-JSON body", status_code=response.status_code) from e
        
        candidates = data.get("candidates") or []
        if not candidates:
            block_reason = (data.get("promptFeedback") or {}).get("blockReason")
            detail = f" (blocked: {block_reason})" if block_reason else ""
            raise CollaboratorError(f"Reasoning service returned no candidates{detail}", status_code=response.status_code)
        
        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        
        chunks = (candidate.get("groundingMetadata") or {}).get("groundingChunks") or []
        sources = [
            GroundingSource(uri=chunk["web"].get("uri", ""), title=chunk["web"].get("title", ""))
            for chunk in chunks
            if isinstance(chunk, dict) and isinstance(chunk.get("web"), dict)
        ]
        
        usage = data.get("usageMetadata", {}).get("totalTokenCount", 0)
        logger.info(f"Reasoning service replied ({len(text)} chars, {usage} tokens)")
        return GenerationResult(text=text, grounding_sources=sources)
    
    async def analyze_eligibility(
        self,
        profile: UserProfile,
        schemes: Optional[List[Scheme]] = None
    ) -> AnalysisResponse:
        """Ask the collaborator which schemes the profile qualifies for"""
        if schemes is None:
            schemes = await self.store.get_all_schemes()
        request = build_eligibility_request(profile, schemes)
        json_mode = self.json_mode
        
        result = await self.generate(
            SYSTEM_INSTRUCTION,
            render_analysis_prompt(request, structured=json_mode),
            use_search=self.settings.reasoning_use_search,
            json_mode=json_mode
        )
        return parse_analysis_text(result.text, result.grounding_sources, structured=json_mode)
    
    async def fetch_master_schemes(self, government: Government, count: int = 20) -> List[Scheme]:
        """Fetch current schemes of one government; an unreadable reply yields []"""
        label = "Rajasthan" if government == Government.STATE else "Central"
        result = await self.generate(
            SYSTEM_INSTRUCTION,
            MASTER_SCHEMES_PROMPT_TEMPLATE.format(count=count, label=label),
            use_search=self.settings.reasoning_use_search
        )
        try:
            records = extract_json_array(result.text)
        except MalformedResponse as e:
            logger.warning(f"Catalog refresh reply unusable: {e}")
            return []
        return decode_schemes(records, origin=SchemeOrigin.COLLABORATOR)
