"""
Pydantic models for welfare scheme records
"""
import hashlib
import json
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)


class Government(str, Enum):
    STATE = "state"
    CENTRAL = "central"


class EligibilityStatus(str, Enum):
    ELIGIBLE = "eligible"
    NOT_ELIGIBLE = "not_eligible"
    CONDITIONAL = "conditional"


class ApplicationType(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    BOTH = "both"
    AUTOMATIC = "automatic"


class SchemeStatus(str, Enum):
    NEW = "new"
    ACTIVE = "active"
    EXPIRED = "expired"


class SchemeOrigin(str, Enum):
    """Where a stored record came from"""
    CATALOG = "catalog"
    COLLABORATOR = "collaborator"


# Application keys the collaborator emits at the top level of a scheme
APPLICATION_KEYS = ("form_source", "application_type", "signatures_required", "submission_point", "official_link")
LEGACY_LINK_KEYS = ("official_pdf_link", "online_apply_link")

# Fields left out of the content hash
HASH_EXCLUDED_FIELDS = {"hash_signature", "last_checked_at", "status", "origin"}


def _normalize_token(value: str) -> str:
    return value.strip().lower().replace("-", "_").replace(" ", "_")


def _as_string_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    return value


class ApplicationInfo(BaseModel):
    """How and where to apply for a scheme"""
    form_source: str = Field(default="", description="Where the form can be obtained")
    application_type: Optional[ApplicationType] = Field(default=None, description="Online, offline, both or automatic")
    signatures_required: List[str] = Field(default_factory=list, description="Who has to sign the form")
    submission_point: str = Field(default="", description="Where the form is submitted")
    official_link: str = Field(default="", description="Official portal or PDF link")
    
    @field_validator('application_type', mode='before')
    @classmethod
    def normalize_application_type(cls, v):
        if v is None or isinstance(v, ApplicationType):
            return v
        token = _normalize_token(str(v))
        if not token:
            return None
        if "online" in token and "offline" in token:
            return ApplicationType.BOTH
        for member in ApplicationType:
            if member.value in token:
                return member
        # Advisory field: unknown wording is dropped rather than failing the record
        return None
    
    @field_validator('signatures_required', mode='before')
    @classmethod
    def coerce_signatures(cls, v):
        return _as_string_list(v)


class Scheme(BaseModel):
    """A government welfare scheme"""
    name: str = Field(..., validation_alias=AliasChoices("name", "yojana_name"), description="Unique scheme name")
    government: Government = Field(..., description="Issuing government")
    category: str = Field(default="", description="Scheme category")
    short_purpose: str = Field(
        default="",
        validation_alias=AliasChoices("short_purpose", "short_purpose_hindi"),
        description="One-line purpose"
    )
    detailed_benefits: str = Field(default="", description="Benefit details")
    eligibility: List[str] = Field(default_factory=list, description="Eligibility criteria, in order")
    eligibility_status: Optional[EligibilityStatus] = Field(default=None, description="Match verdict for a profile")
    eligibility_reason: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("eligibility_reason", "eligibility_reason_hindi"),
        description="Why the profile matches"
    )
    required_documents: List[str] = Field(default_factory=list, description="Documents needed to apply")
    application: ApplicationInfo = Field(default_factory=ApplicationInfo)
    status: SchemeStatus = Field(
        default=SchemeStatus.ACTIVE,
        validation_alias=AliasChoices("status", "scheme_status")
    )
    applicable_area: str = Field(default="")
    beneficiary_type: List[str] = Field(default_factory=list)
    caste_category: List[str] = Field(default_factory=list)
    origin: SchemeOrigin = Field(default=SchemeOrigin.CATALOG)
    hash_signature: Optional[str] = Field(default=None)
    last_checked_at: Optional[datetime] = Field(default=None)
    
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "Pradhan Mantri Kisan Samman Nidhi (PM-KISAN)",
                "government": "central",
                "category": "Agriculture",
                "short_purpose": "भूमिधारक किसान परिवारों को आय सहायता",
                "detailed_benefits": "₹6,000 per year in three instalments",
                "eligibility": ["Family owns cultivable land"],
                "required_documents": ["Aadhaar Card", "Land Record"],
                "application": {
                    "form_source": "pmkisan.gov.in",
                    "application_type": "online",
                    "signatures_required": ["Applicant"],
                    "submission_point": "e-Mitra",
                    "official_link": "https://pmkisan.gov.in"
                },
                "status": "active"
            }
        }
    )
    
    @model_validator(mode='before')
    @classmethod
    def lift_application_fields(cls, data):
        """Move flat application keys into the nested ``application`` block"""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        application = data.get("application")
        application = dict(application) if isinstance(application, dict) else {}
        for key in APPLICATION_KEYS:
            if key in data:
                application.setdefault(key, data.pop(key))
        for key in LEGACY_LINK_KEYS:
            link = data.pop(key, None)
            if link and not application.get("official_link"):
                application["official_link"] = link
        data["application"] = application
        return data
    
    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Scheme name must not be empty")
        return v
    
    @field_validator('government', mode='before')
    @classmethod
    def normalize_government(cls, v):
        if isinstance(v, Government):
            return v
        token = _normalize_token(str(v))
        if "central" in token or "india" in token:
            return Government.CENTRAL
        if token and ("state" in token or "govt" in token or "rajasthan" in token):
            return Government.STATE
        raise ValueError(f"Unknown issuing government: {v!r}")
    
    @field_validator('eligibility_status', mode='before')
    @classmethod
    def normalize_eligibility_status(cls, v):
        if v is None or isinstance(v, EligibilityStatus):
            return v
        token = _normalize_token(str(v))
        if not token:
            return None
        if token in ("not_eligible", "ineligible", "noteligible"):
            return EligibilityStatus.NOT_ELIGIBLE
        if "conditional" in token or "partial" in token:
            return EligibilityStatus.CONDITIONAL
        if token == EligibilityStatus.ELIGIBLE.value:
            return EligibilityStatus.ELIGIBLE
        # Advisory field: keep the match, drop the verdict
        return None
    
    @field_validator('status', mode='before')
    @classmethod
    def normalize_status(cls, v):
        if isinstance(v, SchemeStatus):
            return v
        token = _normalize_token(str(v or ""))
        if token in ("", "updated"):
            return SchemeStatus.ACTIVE
        return token
    
    @field_validator('eligibility', 'required_documents', 'beneficiary_type', 'caste_category', mode='before')
    @classmethod
    def coerce_string_lists(cls, v):
        return _as_string_list(v)
    
    def content_hash(self) -> str:
        """Hash of the scheme content, ignoring bookkeeping fields"""
        core = self.model_dump(mode="json", exclude=HASH_EXCLUDED_FIELDS)
        payload = json.dumps(core, sort_keys=True, ensure_ascii=False, separators=(",", ":"))
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()
    
    def to_context(self) -> Dict[str, Any]:
        """Compact projection sent to the reasoning collaborator"""
        return {"name": self.name, "eligibility": list(self.eligibility)}


class SchemeDecodeResult(BaseModel):
    """Outcome of decoding one untrusted scheme record"""
    scheme: Optional[Scheme] = None
    error: Optional[str] = None
    
    @property
    def ok(self) -> bool:
        return self.scheme is not None


def decode_scheme(raw: Any, origin: Optional[SchemeOrigin] = None) -> SchemeDecodeResult:
    """
    Validate a raw scheme record without raising
    
    Args:
        raw: Scheme instance or dict as produced by the collaborator or the catalog
        origin: Overrides the record's origin when given
    
    Returns:
        SchemeDecodeResult holding either the scheme or a diagnostic
    """
    if isinstance(raw, Scheme):
        scheme = raw
    elif isinstance(raw, dict):
        try:
            scheme = Scheme.model_validate(raw)
        except ValidationError as e:
            label = raw.get("name") or raw.get("yojana_name") or "<unnamed>"
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}" for err in e.errors()
            )
            return SchemeDecodeResult(error=f"Invalid scheme {label!r}: {problems}")
    else:
        return SchemeDecodeResult(error=f"Expected a scheme object, got {type(raw).__name__}")
    
    if origin is not None and scheme.origin != origin:
        scheme = scheme.model_copy(update={"origin": origin})
    return SchemeDecodeResult(scheme=scheme)


def decode_schemes(records: Iterable[Any], origin: Optional[SchemeOrigin] = None) -> List[Scheme]:
    """Decode a batch of records, dropping the invalid ones with a log line"""
    schemes = []
    for raw in records:
        result = decode_scheme(raw, origin=origin)
        if result.ok:
            schemes.append(result.scheme)
        else:
            logger.warning(f"Dropping scheme record: {result.error}")
    return schemes
