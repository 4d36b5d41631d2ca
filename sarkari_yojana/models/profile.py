"""
Pydantic model for the citizen profile used in eligibility analysis
"""
import hashlib
import json
from typing import Any, Dict

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from ..catalog import INCOME_SLABS, TSP_DISTRICTS
from ..config import settings

YES = "Yes"
NO = "No"


class UserProfile(BaseModel):
    """
    Demographic and socioeconomic profile of one household member.
    
    Every field is a plain string (numbers are kept as numeric strings) so
    the profile can be rendered by form widgets and hashed without type
    ambiguity. Instances are immutable; use ``updated`` to change fields.
    """
    # Identity
    full_name: str = Field(default="", validation_alias=AliasChoices("full_name", "fullName"))
    phone: str = ""
    gender: str = "Female"
    dob: str = "1995-01-01"
    age: str = "30"
    marital_status: str = "Married"
    
    # Location
    state: str = "Rajasthan"
    district: str = "Jaipur"
    rural_or_urban: str = "Rural"
    is_tsp_area: str = NO
    
    # Family
    family_count: str = "4"
    head_of_family: str = YES
    children_before_cutoff: str = "0"
    children_after_cutoff: str = "0"
    
    # Income and category
    income: str = INCOME_SLABS[1]
    bpl: str = NO
    ration_card_type: str = "APL"
    category: str = "General"
    minority: str = NO
    
    # Education
    is_studying: str = NO
    education: str = "Graduate"
    institution_type: str = "N/A"
    current_class: str = "N/A"
    
    # Health
    pregnant: str = NO
    lactating: str = NO
    disability: str = NO
    disability_percent: str = "0"
    
    # Employment
    employment_status: str = "Unemployed"
    labour_card: str = NO
    mnrega_card: str = NO
    is_farmer: str = NO
    land_owner: str = NO
    pm_kisan_beneficiary: str = NO
    pension_status: str = "None"
    is_senior_citizen: str = NO
    is_destitute: str = NO
    is_govt_employee: str = "None"
    family_govt_employee: str = "None"
    
    # Documents held
    jan_aadhar_status: str = YES
    bank_account_dbt: str = YES
    
    model_config = ConfigDict(frozen=True, extra="ignore")
    
    @model_validator(mode='before')
    @classmethod
    def derive_fields(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key, value in data.items():
            if isinstance(value, bool):
                data[key] = YES if value else NO
            elif isinstance(value, (int, float)):
                data[key] = str(value)
        
        state = data.get("state", cls.model_fields["state"].default)
        if state == settings.tsp_state:
            district = data.get("district", cls.model_fields["district"].default)
            data["is_tsp_area"] = YES if district in TSP_DISTRICTS else NO
        return data
    
    @property
    def tsp_rule_active(self) -> bool:
        """While active, ``is_tsp_area`` follows the district and cannot be set"""
        return self.state == settings.tsp_state
    
    def updated(self, **changes: Any) -> "UserProfile":
        """Return a copy with the given fields changed and derived fields recomputed"""
        unknown = sorted(set(changes) - set(type(self).model_fields))
        if unknown:
            raise ValueError(f"Unknown profile field(s): {', '.join(unknown)}")
        return type(self).model_validate({**self.model_dump(), **changes})
    
    def fingerprint(self) -> str:
        """Deterministic cache key over every field value"""
        payload = json.dumps(self.model_dump(), sort_keys=True, ensure_ascii=False, separators=(",", ":"))
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()
    
    def derived_signals(self) -> Dict[str, str]:
        """Signals the reasoning collaborator is told to weigh explicitly"""
        return {
            "tribal_sub_plan_area": self.is_tsp_area,
            "jan_aadhaar_status": self.jan_aadhar_status,
            "children_before_cutoff": self.children_before_cutoff,
            "children_after_cutoff": self.children_after_cutoff,
            "is_studying": self.is_studying,
            "current_class": self.current_class,
            "head_of_family": self.head_of_family,
        }


def demo_profile() -> UserProfile:
    """Tester profile used by the admin auto-fill action"""
    return UserProfile(
        full_name="Sita Devi",
        phone="9001234567",
        age="34",
        dob="1990-05-10",
        is_farmer=YES,
        district="Banswara",
        category="ST",
        ration_card_type="BPL"
    )
