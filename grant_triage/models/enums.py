"""Controlled vocabularies shared by the catalog, the applicant profile and the engine."""

from enum import Enum


class BusinessSize(str, Enum):
    """EU-style enterprise size class."""

    MICRO = "micro"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class BusinessAge(str, Enum):
    """Startup (< 5 years trading) vs established."""

    STARTUP = "startup"
    ESTABLISHED = "established"


class LegalStructure(str, Enum):
    SELF_EMPLOYED = "self_employed"
    PARTNERSHIP = "partnership"
    LIMITED_COMPANY = "limited_company"


class RegistrationStatus(str, Enum):
    """Business registration status.

    The intake form historically submitted ``yes`` / ``in_process`` / ``no``;
    those values are still accepted and mapped onto the catalog vocabulary.
    """

    REGISTERED = "registered"
    IN_PROGRESS = "in_progress"
    NOT_REGISTERED = "not_registered"

    @classmethod
    def _missing_(cls, value):
        legacy = {
            "yes": cls.REGISTERED,
            "in_process": cls.IN_PROGRESS,
            "no": cls.NOT_REGISTERED,
        }
        if isinstance(value, str):
            return legacy.get(value.lower())
        return None


class ProjectLocation(str, Enum):
    """Project location. Gozo is the bonus-rate region."""

    MALTA = "malta"
    GOZO = "gozo"


BONUS_REGION = ProjectLocation.GOZO

# Primary activity whose schemes may define a dedicated hospitality rate
HOSPITALITY_ACTIVITY = "hospitality"

# State-aid framework subject to the cumulative ceiling
DE_MINIMIS_FRAMEWORK = "de_minimis"

LEGAL_STRUCTURE_LABELS: dict[str, str] = {
    LegalStructure.SELF_EMPLOYED.value: "Self-Employed (Sole Trader)",
    LegalStructure.PARTNERSHIP.value: "Partnership",
    LegalStructure.LIMITED_COMPANY.value: "Limited Liability Company (Ltd)",
}

LEGAL_STRUCTURE_SHORT_LABELS: dict[str, str] = {
    LegalStructure.SELF_EMPLOYED.value: "Self-Employed",
    LegalStructure.PARTNERSHIP.value: "Partnership",
    LegalStructure.LIMITED_COMPANY.value: "Ltd",
}

PRIMARY_ACTIVITY_LABELS: dict[str, str] = {
    "manufacturing": "Manufacturing & Production",
    "technology": "Technology & Digital Solutions",
    "research": "Research, Innovation & IP",
    "life_sciences": "Life Sciences & Advanced Technologies",
    "sustainability": "Sustainability & Environmental Projects",
    "industrial": "Industrial & Technical Services",
    "creative": "Culture, Creative & Audio-Visual",
    "business": "Business Services & Advisory",
    "skills": "Skills & Workforce Development",
    "retail": "Retail and wholesale",
    "construction": "Construction and Finishing",
    "hospitality": "Hotels and guesthouse",
}
