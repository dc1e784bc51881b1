from __future__ import annotations

from enum import StrEnum


class BenefitType(StrEnum):
    __slots__ = ()

    SCHOLARSHIP = "scholarship"
    HEALTHCARE = "healthcare"
    FINANCIAL_AID = "financial_aid"
    EDUCATION = "education"
    EMPLOYMENT = "employment"
    HOUSING = "housing"
    AGRICULTURE = "agriculture"
    SOCIAL_SECURITY = "social_security"
    DISABILITY = "disability"
    WOMEN_WELFARE = "women_welfare"
    CHILD_WELFARE = "child_welfare"
    SENIOR_CITIZEN = "senior_citizen"


class OccupationType(StrEnum):
    __slots__ = ()

    FARMER = "farmer"
    STUDENT = "student"
    DAILY_WAGE_WORKER = "daily_wage_worker"
    GOVERNMENT_EMPLOYEE = "government_employee"
    PRIVATE_EMPLOYEE = "private_employee"
    TEACHER = "teacher"
    UNEMPLOYED = "unemployed"
    SELF_EMPLOYED = "self_employed"
    HOMEMAKER = "homemaker"
    RETIRED = "retired"
    OTHER = "other"


class CriterionType(StrEnum):
    __slots__ = ()

    AGE_RANGE = "age_range"
    INCOME_LIMIT = "income_limit"
    OCCUPATION = "occupation"
    EDUCATION_LEVEL = "education_level"
    FAMILY_SIZE = "family_size"
    LOCATION = "location"
    GENDER = "gender"
    CASTE_CATEGORY = "caste_category"
    DISABILITY_STATUS = "disability_status"
    MARITAL_STATUS = "marital_status"
    RESIDENCE_TYPE = "residence_type"


class ComparisonOperator(StrEnum):
    __slots__ = ()

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_THAN_OR_EQUALS = "greater_than_or_equals"
    LESS_THAN_OR_EQUALS = "less_than_or_equals"
    IN = "in"
    NOT_IN = "not_in"
    BETWEEN = "between"
    CONTAINS = "contains"


class OperatorFamily(StrEnum):
    """Shape of the value a criterion carries for a given operator."""

    __slots__ = ()

    SCALAR = "scalar"    # EQUALS / NOT_EQUALS
    ORDERED = "ordered"  # GT / LT / GTE / LTE
    SET = "set"          # IN / NOT_IN
    RANGE = "range"      # BETWEEN
    TEXT = "text"        # CONTAINS


class ProfileField(StrEnum):
    """Closed set of profile keys an eligibility criterion may reference."""

    __slots__ = ()

    AGE = "age"
    AGE_GROUP = "age_group"
    GENDER = "gender"
    OCCUPATION = "occupation"
    EDUCATION_LEVEL = "education_level"
    INCOME_RANGE = "income_range"
    ANNUAL_INCOME = "annual_income"
    CASTE_CATEGORY = "caste_category"
    MARITAL_STATUS = "marital_status"
    LOCATION = "location"
    STATE = "state"
    RESIDENCE_TYPE = "residence_type"
    FAMILY_SIZE = "family_size"
    IS_DISABLED = "is_disabled"
    DISABILITY_PERCENTAGE = "disability_percentage"


class RelationshipType(StrEnum):
    __slots__ = ()

    SELF = "self"
    SPOUSE = "spouse"
    CHILD = "child"
    PARENT = "parent"
    SIBLING = "sibling"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    OTHER = "other"


class EducationLevel(StrEnum):
    __slots__ = ()

    NO_FORMAL_EDUCATION = "no_formal_education"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    HIGHER_SECONDARY = "higher_secondary"
    GRADUATE = "graduate"
    POST_GRADUATE = "post_graduate"
    DOCTORATE = "doctorate"
    DIPLOMA = "diploma"
    VOCATIONAL = "vocational"


class IncomeLevel(StrEnum):
    __slots__ = ()

    BPL = "bpl"  # Below Poverty Line
    LOW = "low"
    LOWER_MIDDLE = "lower_middle"
    MIDDLE = "middle"
    UPPER_MIDDLE = "upper_middle"
    HIGH = "high"


class AgeRange(StrEnum):
    __slots__ = ()

    INFANT = "infant"            # 0-5
    CHILD = "child"              # 6-14
    YOUTH = "youth"              # 15-24
    ADULT = "adult"              # 25-44
    MIDDLE_AGED = "middle_aged"  # 45-59
    SENIOR = "senior"            # 60+


class Gender(StrEnum):
    __slots__ = ()

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class CasteCategory(StrEnum):
    __slots__ = ()

    GENERAL = "general"
    OBC = "obc"
    SC = "sc"
    ST = "st"
    EWS = "ews"
    MINORITY = "minority"


class MaritalStatus(StrEnum):
    __slots__ = ()

    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"
    SEPARATED = "separated"


class ResidenceType(StrEnum):
    __slots__ = ()

    RURAL = "rural"
    URBAN = "urban"
    SEMI_URBAN = "semi_urban"


class GovernmentLevel(StrEnum):
    __slots__ = ()

    CENTRAL = "central"
    STATE = "state"
    LOCAL = "local"


class SupportedLanguage(StrEnum):
    __slots__ = ()

    ENGLISH = "en"
    HINDI = "hi"
    TAMIL = "ta"
    TELUGU = "te"
    KANNADA = "kn"
    MALAYALAM = "ml"
    MARATHI = "mr"
    BENGALI = "bn"
    GUJARATI = "gu"
    PUNJABI = "pa"
    ODIA = "or"


class Priority(StrEnum):
    __slots__ = ()

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ApplicableTo(StrEnum):
    __slots__ = ()

    INDIVIDUAL = "individual"
    FAMILY = "family"
    SPECIFIC_MEMBER = "specific_member"
