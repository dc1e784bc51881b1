from src.models.enums import (
    AgeRange,
    ApplicableTo,
    BenefitType,
    CasteCategory,
    ComparisonOperator,
    CriterionType,
    EducationLevel,
    Gender,
    GovernmentLevel,
    IncomeLevel,
    MaritalStatus,
    OccupationType,
    OperatorFamily,
    Priority,
    ProfileField,
    RelationshipType,
    ResidenceType,
    SupportedLanguage,
)
from src.models.matching import (
    CategorizedMatchResults,
    CriterionMatchExplanation,
    FamilyMemberMatchSummary,
    MatchExplanation,
    MatchingSummary,
    MatchResult,
)
from src.models.scheme import (
    OPERATOR_FAMILIES,
    ApplicationStep,
    BenefitDetails,
    ContactInformation,
    DataSource,
    EligibilityCriterion,
    GovernmentScheme,
    RequiredDocument,
)
from src.models.user_profile import FamilyMember, LocationInfo, UserProfile, age_group_for

__all__ = [
    "OPERATOR_FAMILIES",
    "AgeRange",
    "ApplicableTo",
    "ApplicationStep",
    "BenefitDetails",
    "BenefitType",
    "CasteCategory",
    "CategorizedMatchResults",
    "ComparisonOperator",
    "ContactInformation",
    "CriterionMatchExplanation",
    "CriterionType",
    "DataSource",
    "EducationLevel",
    "EligibilityCriterion",
    "FamilyMember",
    "FamilyMemberMatchSummary",
    "Gender",
    "GovernmentLevel",
    "GovernmentScheme",
    "IncomeLevel",
    "LocationInfo",
    "MaritalStatus",
    "MatchExplanation",
    "MatchResult",
    "MatchingSummary",
    "OccupationType",
    "OperatorFamily",
    "Priority",
    "ProfileField",
    "RelationshipType",
    "RequiredDocument",
    "ResidenceType",
    "SupportedLanguage",
    "UserProfile",
    "age_group_for",
]
