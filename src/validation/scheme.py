"""Integrity checks for scheme catalog records.

:func:`validate_scheme` separates hard errors (the record must not enter
the catalog) from warnings (the record is usable but needs curation).
Staleness helpers flag records whose ``last_updated`` is older than a
threshold so they can be re-verified against the official source.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from src.models.scheme import (
    ApplicationStep,
    DataSource,
    EligibilityCriterion,
    GovernmentScheme,
    RequiredDocument,
    ensure_utc,
)

_SECONDS_PER_DAY = 86_400
_MIN_NAME_LENGTH = 3
_MIN_DESCRIPTION_LENGTH = 10


class SchemeValidationResult(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def validate_criterion(criterion: EligibilityCriterion) -> list[str]:
    errors: list[str] = []
    if not criterion.id:
        errors.append("Criterion must have an id")
    if criterion.value is None:
        errors.append("Criterion must have a value")
    if not criterion.description:
        errors.append("Criterion must have a description")
    return errors


def validate_application_step(step: ApplicationStep) -> list[str]:
    errors: list[str] = []
    if step.step_number < 1:
        errors.append("Application step must have a valid step number")
    if not step.title:
        errors.append("Application step must have a title")
    if not step.description:
        errors.append("Application step must have a description")
    if not step.estimated_time:
        errors.append("Application step must have estimated time")
    if step.online_available and not step.online_url:
        errors.append("Online available step should have an online URL")
    return errors


def validate_document(doc: RequiredDocument) -> list[str]:
    errors: list[str] = []
    if not doc.name:
        errors.append("Document must have a name")
    if not doc.description:
        errors.append("Document must have a description")
    return errors


def validate_data_source(source: DataSource) -> list[str]:
    errors: list[str] = []
    if not source.name:
        errors.append("Source must have a name")
    if not source.url:
        errors.append("Source must have a URL")
    if source.last_accessed is None:
        errors.append("Source must have last accessed date")
    if source.is_official is None:
        errors.append("Source must indicate if it is official")
    return errors


def has_complete_source_attribution(scheme: GovernmentScheme) -> bool:
    return scheme.source is not None and not validate_data_source(scheme.source)


def validate_scheme(scheme: GovernmentScheme, *, now: datetime | None = None) -> SchemeValidationResult:
    """Validate a scheme record for catalog admission."""
    now = now or datetime.now(UTC)
    errors: list[str] = []
    warnings: list[str] = []

    if not scheme.implementing_agency:
        errors.append("Missing required field: implementing_agency")
    if scheme.contact_info is None:
        errors.append("Missing required field: contact_info")
    if scheme.source is None:
        errors.append("Missing required field: source")

    if len(scheme.name) < _MIN_NAME_LENGTH:
        errors.append(f"Scheme name must be at least {_MIN_NAME_LENGTH} characters")
    if len(scheme.description) < _MIN_DESCRIPTION_LENGTH:
        errors.append(f"Scheme description must be at least {_MIN_DESCRIPTION_LENGTH} characters")

    if not scheme.eligibility_criteria:
        warnings.append("Scheme has no eligibility criteria")
    for index, criterion in enumerate(scheme.eligibility_criteria, start=1):
        errors.extend(f"Criterion {index}: {err}" for err in validate_criterion(criterion))

    if not scheme.application_process:
        warnings.append("Scheme has no application steps")
    for index, step in enumerate(scheme.application_process, start=1):
        errors.extend(f"Step {index}: {err}" for err in validate_application_step(step))
    step_numbers = sorted(s.step_number for s in scheme.application_process)
    if step_numbers != list(range(1, len(step_numbers) + 1)):
        warnings.append("Application steps should be numbered sequentially starting from 1")

    for index, doc in enumerate(scheme.documents, start=1):
        errors.extend(f"Document {index}: {err}" for err in validate_document(doc))

    if scheme.source is not None:
        errors.extend(f"Source: {err}" for err in validate_data_source(scheme.source))

    if scheme.contact_info is not None:
        contact = scheme.contact_info
        if not contact.department:
            errors.append("Contact info must have a department")
        if not (contact.phone or contact.email or contact.website_url):
            warnings.append("Contact info should have at least one contact method")

    if not scheme.benefits:
        warnings.append("Scheme has no benefits listed")

    if scheme.is_active and not scheme.is_open_for_application:
        warnings.append("Active scheme is not open for applications")

    if scheme.application_deadline is not None and scheme.application_deadline < now:
        warnings.append("Application deadline has passed")

    return SchemeValidationResult(is_valid=not errors, errors=errors, warnings=warnings)


def is_scheme_stale(
    scheme: GovernmentScheme,
    threshold_days: int,
    *,
    now: datetime | None = None,
) -> bool:
    """True when ``last_updated`` is more than ``threshold_days`` away from now.

    The distance is measured in whole days rounded up, so a record updated
    a few minutes ago counts as one day old.
    """
    now = ensure_utc(now) if now is not None else datetime.now(UTC)
    elapsed = abs((now - ensure_utc(scheme.last_updated)).total_seconds())
    return math.ceil(elapsed / _SECONDS_PER_DAY) > threshold_days


def get_stale_schemes(
    schemes: Iterable[GovernmentScheme],
    threshold_days: int,
    *,
    now: datetime | None = None,
) -> list[GovernmentScheme]:
    return [s for s in schemes if is_scheme_stale(s, threshold_days, now=now)]
