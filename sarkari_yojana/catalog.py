"""
Reference catalog: enumerated field domains and the baseline scheme records

The scheme records here are raw dicts in the same shape the reasoning
collaborator returns. They go through the same decode step before they
are written to the store.
"""
from typing import Any, Dict, List

STATES = ["Rajasthan", "Central"]

RAJASTHAN_DISTRICTS = [
    "Ajmer", "Alwar", "Banswara", "Baran", "Barmer", "Bharatpur", "Bhilwara", "Bikaner", "Bundi", "Chittorgarh",
    "Churu", "Dausa", "Dholpur", "Dungarpur", "Hanumangarh", "Jaipur", "Jaisalmer", "Jalore", "Jhalawar",
    "Jhunjhunu", "Jodhpur", "Karauli", "Kota", "Nagaur", "Pali", "Pratapgarh", "Rajsamand", "Sawai Madhopur",
    "Sikar", "Sirohi", "Sri Ganganagar", "Tonk", "Udaipur"
]

# Districts fully or partly notified under the Tribal Sub Plan
TSP_DISTRICTS = frozenset([
    "Banswara", "Dungarpur", "Pratapgarh", "Udaipur", "Sirohi", "Rajsamand", "Chittorgarh", "Pali"
])

CATEGORIES = ["General", "OBC", "SC", "ST", "EWS", "MBC"]

BENEFICIARY_TYPES = [
    "Student", "Youth", "Widow", "Woman", "Farmer", "Private Job", "Unemployed",
    "Senior Citizen", "Disabled", "BPL Family", "Laborer", "Girl Child"
]

OCCUPATIONS = ["Farmer", "Laborer", "Small Business", "Private Employee", "Govt Employee", "Student", "Housewife", "Unemployed"]
EDUCATION_LEVELS = ["Illiterate", "Primary", "Middle", "High School", "Graduate", "Post Graduate", "Diploma"]
YES_NO = ["Yes", "No"]
GENDER = ["Male", "Female", "Transgender"]
MARITAL_STATUS = ["Single", "Married", "Widowed", "Divorced"]
AREA_TYPE = ["Urban", "Rural", "Tribal", "TSP"]
INCOME_SLABS = ["Below 1 Lakh", "1 - 2.5 Lakh", "2.5 - 5 Lakh", "5 - 8 Lakh", "Above 8 Lakh"]
RATION_CARD_TYPES = ["None", "APL", "BPL", "Antyodaya", "State BPL"]
EMPLOYMENT_STATUS = ["Unemployed", "Self Employed", "Private Job", "Govt Job", "Daily Wage", "Retired"]
GOVT_SERVICE = ["None", "State Govt", "Central Govt", "PSU", "Retired Govt"]
PENSION_STATUS = ["None", "Old Age", "Widow", "Disability", "Govt Service"]

# Two-child norm cutoff used by several Rajasthan schemes
DEPENDENT_CUTOFF_DATE = "2002-06-01"


REFERENCE_SCHEMES: List[Dict[str, Any]] = [
    {
        "name": "Pradhan Mantri Kisan Samman Nidhi (PM-KISAN)",
        "government": "Central Govt",
        "category": "Agriculture",
        "applicable_area": "All India",
        "beneficiary_type": ["Farmer"],
        "caste_category": ["General", "OBC", "SC", "ST", "EWS", "MBC"],
        "short_purpose": "भूमिधारक किसान परिवारों को आय सहायता",
        "detailed_benefits": "₹6,000 per year paid in three instalments of ₹2,000 directly to the bank account.",
        "eligibility": [
            "Family owns cultivable land in its own name",
            "No family member is an income tax payer",
            "No family member is a serving or retired government employee (except Group D)"
        ],
        "required_documents": ["Aadhaar Card", "Land Record (Jamabandi)", "Bank Passbook"],
        "form_source": "pmkisan.gov.in / e-Mitra",
        "application_type": "online",
        "signatures_required": ["Applicant", "Patwari"],
        "submission_point": "e-Mitra or PM-KISAN portal",
        "official_link": "https://pmkisan.gov.in",
        "status": "active"
    },
    {
        "name": "Mukhyamantri Ayushman Arogya Yojana (MAA)",
        "government": "Rajasthan Govt",
        "category": "Health",
        "applicable_area": "Rajasthan",
        "beneficiary_type": ["BPL Family", "Farmer", "Laborer"],
        "caste_category": ["General", "OBC", "SC", "ST", "EWS", "MBC"],
        "short_purpose": "परिवार को ₹25 लाख तक का कैशलेस इलाज",
        "detailed_benefits": "Cashless treatment up to ₹25 lakh per family per year in empanelled hospitals.",
        "eligibility": [
            "Resident family of Rajasthan with a Jan Aadhaar card",
            "NFSA, SECC, small/marginal farmer and contract worker families are enrolled free"
        ],
        "required_documents": ["Jan Aadhaar Card", "Aadhaar Card"],
        "form_source": "e-Mitra / MAA portal",
        "application_type": "both",
        "signatures_required": ["Head of Family"],
        "submission_point": "Nearest e-Mitra",
        "official_link": "https://maayojana.rajasthan.gov.in",
        "status": "active"
    },
    {
        "name": "Palanhar Yojana",
        "government": "Rajasthan Govt",
        "category": "Child Welfare",
        "applicable_area": "Rajasthan",
        "beneficiary_type": ["Widow", "Girl Child"],
        "caste_category": ["General", "OBC", "SC", "ST", "EWS", "MBC"],
        "short_purpose": "अनाथ एवं विशेष श्रेणी के बच्चों के पालन-पोषण हेतु सहायता",
        "detailed_benefits": "₹750 per month per child up to age 6 and ₹1,500 per month from 6 to 18, plus ₹2,500 annually.",
        "eligibility": [
            "Child is an orphan or a child of a widow, remarried widow or disabled parent",
            "Annual family income does not exceed ₹1.20 lakh",
            "Child aged 2-6 is enrolled in Anganwadi and 6-18 in school"
        ],
        "required_documents": ["Jan Aadhaar Card", "Income Certificate", "School Certificate", "Death Certificate of Parent"],
        "form_source": "SJMS SMS portal / e-Mitra",
        "application_type": "online",
        "signatures_required": ["Palanhar (Guardian)", "School Head"],
        "submission_point": "e-Mitra",
        "official_link": "https://sje.rajasthan.gov.in",
        "status": "active"
    },
    {
        "name": "Indira Gandhi Matritva Poshan Yojana",
        "government": "Rajasthan Govt",
        "category": "Women & Child",
        "applicable_area": "Rajasthan",
        "beneficiary_type": ["Woman"],
        "caste_category": ["General", "OBC", "SC", "ST", "EWS", "MBC"],
        "short_purpose": "दूसरी संतान के जन्म पर गर्भवती महिलाओं को पोषण सहायता",
        "detailed_benefits": "₹6,000 in five instalments for the second child, linked to antenatal check-ups and immunisation.",
        "eligibility": [
            "Pregnant woman expecting her second living child",
            "Registered at an Anganwadi centre",
            "Not a government employee"
        ],
        "required_documents": ["Jan Aadhaar Card", "MCP Card", "Bank Passbook"],
        "form_source": "Anganwadi Centre",
        "application_type": "offline",
        "signatures_required": ["Beneficiary", "Anganwadi Worker"],
        "submission_point": "Anganwadi Centre",
        "official_link": "https://wcd.rajasthan.gov.in",
        "status": "active"
    },
    {
        "name": "Pradhan Mantri Awas Yojana - Gramin",
        "government": "Central Govt",
        "category": "Housing",
        "applicable_area": "Rural India",
        "beneficiary_type": ["BPL Family"],
        "caste_category": ["General", "OBC", "SC", "ST", "EWS", "MBC"],
        "short_purpose": "ग्रामीण बेघर परिवारों को पक्का मकान",
        "detailed_benefits": "₹1.20 lakh (₹1.30 lakh in hilly/tribal areas) to build a pucca house, plus MGNREGA wages.",
        "eligibility": [
            "Rural household without a pucca house",
            "Listed in SECC 2011 / Awaas+ survey",
            "No family member in government service"
        ],
        "required_documents": ["Aadhaar Card", "Job Card (MGNREGA)", "Bank Passbook"],
        "form_source": "Gram Panchayat",
        "application_type": "offline",
        "signatures_required": ["Applicant", "Gram Sevak"],
        "submission_point": "Gram Panchayat office",
        "official_link": "https://pmayg.nic.in",
        "status": "active"
    },
    {
        "name": "Pradhan Mantri Ujjwala Yojana",
        "government": "Central Govt",
        "category": "Energy",
        "applicable_area": "All India",
        "beneficiary_type": ["Woman", "BPL Family"],
        "caste_category": ["General", "OBC", "SC", "ST", "EWS", "MBC"],
        "short_purpose": "गरीब परिवार की महिलाओं को मुफ्त एलपीजी कनेक्शन",
        "detailed_benefits": "Deposit-free LPG connection with first refill and stove.",
        "eligibility": [
            "Adult woman of a poor household",
            "No existing LPG connection in the household"
        ],
        "required_documents": ["Aadhaar Card", "Ration Card", "Bank Passbook"],
        "form_source": "LPG distributor / pmuy.gov.in",
        "application_type": "both",
        "signatures_required": ["Applicant"],
        "submission_point": "Nearest LPG distributor",
        "official_link": "https://pmuy.gov.in",
        "status": "active"
    },
    {
        "name": "Mukhyamantri Rajshri Yojana",
        "government": "Rajasthan Govt",
        "category": "Girl Child",
        "applicable_area": "Rajasthan",
        "beneficiary_type": ["Girl Child"],
        "caste_category": ["General", "OBC", "SC", "ST", "EWS", "MBC"],
        "short_purpose": "बालिका के जन्म से 12वीं तक चरणबद्ध आर्थिक सहायता",
        "detailed_benefits": "₹50,000 in six instalments from birth to passing Class 12.",
        "eligibility": [
            "Girl born on or after 1 June 2016 in a government or empanelled hospital",
            "Parents hold a Jan Aadhaar card"
        ],
        "required_documents": ["Jan Aadhaar Card", "Birth Certificate", "Immunisation Card"],
        "form_source": "Automatic through PCTS registration",
        "application_type": "automatic",
        "signatures_required": [],
        "submission_point": "Hospital / School",
        "official_link": "https://wcd.rajasthan.gov.in",
        "status": "active"
    },
    {
        "name": "Mukhyamantri Ekal Nari Samman Pension Yojana",
        "government": "Rajasthan Govt",
        "category": "Social Security",
        "applicable_area": "Rajasthan",
        "beneficiary_type": ["Widow", "Woman"],
        "caste_category": ["General", "OBC", "SC", "ST", "EWS", "MBC"],
        "short_purpose": "विधवा, तलाकशुदा एवं परित्यक्ता महिलाओं को मासिक पेंशन",
        "detailed_benefits": "Monthly pension from ₹1,150 rising with age, paid by DBT.",
        "eligibility": [
            "Widow, divorced or abandoned woman aged 18 or above",
            "Annual family income below ₹48,000",
            "Not receiving any other government pension"
        ],
        "required_documents": ["Jan Aadhaar Card", "Income Certificate", "Husband's Death Certificate or Divorce Decree"],
        "form_source": "SSP portal / e-Mitra",
        "application_type": "online",
        "signatures_required": ["Applicant", "Sarpanch or Ward Member"],
        "submission_point": "e-Mitra",
        "official_link": "https://ssp.rajasthan.gov.in",
        "status": "active"
    },
    {
        "name": "Tribal Area Development (TAD) Scooty Distribution Scheme",
        "government": "Rajasthan Govt",
        "category": "Education",
        "applicable_area": "TSP districts of Rajasthan",
        "beneficiary_type": ["Student", "Girl Child"],
        "caste_category": ["ST"],
        "short_purpose": "जनजाति छात्राओं को उच्च शिक्षा हेतु स्कूटी",
        "detailed_benefits": "Free scooty with registration and insurance for meritorious ST girl students in college.",
        "eligibility": [
            "ST girl student resident of a TSP area",
            "At least 65% marks in Class 12 (Rajasthan board) or 75% (CBSE)",
            "Annual family income below ₹2.5 lakh",
            "Regular student in a government college"
        ],
        "required_documents": ["Caste Certificate", "Marksheet", "Income Certificate", "College Admission Receipt"],
        "form_source": "HTE portal / SSO",
        "application_type": "online",
        "signatures_required": ["Student", "College Principal"],
        "submission_point": "College",
        "official_link": "https://hte.rajasthan.gov.in",
        "status": "active"
    },
]


def reference_data() -> Dict[str, Any]:
    """Enumerated input domains, as one mapping for the form layer"""
    return {
        "states": STATES,
        "districts": RAJASTHAN_DISTRICTS,
        "tsp_districts": sorted(TSP_DISTRICTS),
        "categories": CATEGORIES,
        "beneficiary_types": BENEFICIARY_TYPES,
        "occupations": OCCUPATIONS,
        "education_levels": EDUCATION_LEVELS,
        "yes_no": YES_NO,
        "gender": GENDER,
        "marital_status": MARITAL_STATUS,
        "area_type": AREA_TYPE,
        "income_slabs": INCOME_SLABS,
        "ration_card_types": RATION_CARD_TYPES,
        "employment_status": EMPLOYMENT_STATUS,
        "govt_service": GOVT_SERVICE,
        "pension_status": PENSION_STATUS,
        "dependent_cutoff_date": DEPENDENT_CUTOFF_DATE,
    }
