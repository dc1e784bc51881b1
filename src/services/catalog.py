"""In-memory government scheme catalog.

Holds :class:`~src.models.scheme.GovernmentScheme` records keyed by id and
serves the read queries the matching flow needs: all active schemes,
lookup by id, by benefit category, by state, free-text search and a
staleness report.  The matching engine never reads the catalog directly;
callers pass it an immutable :meth:`InMemorySchemeCatalog.snapshot`.
"""

from __future__ import annotations

import re
from collections import Counter
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Final

import structlog
from pydantic import BaseModel, Field, ValidationError

from config.settings import settings
from src.data.seed import load_schemes
from src.models.enums import BenefitType, GovernmentLevel
from src.models.scheme import GovernmentScheme
from src.validation.scheme import SchemeValidationResult, is_scheme_stale, validate_scheme

logger = structlog.get_logger(__name__)

_MIN_SEARCH_TERM_LENGTH: Final[int] = 3
_WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")


class CatalogStats(BaseModel):
    total_schemes: int = 0
    active_schemes: int = 0
    stale_schemes: int = 0
    last_refresh: datetime | None = None
    schemes_by_category: dict[BenefitType, int] = Field(default_factory=dict)


class InMemorySchemeCatalog:
    """Dictionary-backed scheme store.

    Parameters
    ----------
    staleness_threshold_days:
        Default age, in days, after which a scheme is reported stale.
        Falls back to ``settings.staleness_threshold_days``.
    """

    __slots__ = ("_last_refresh", "_schemes", "_staleness_threshold_days")

    def __init__(self, *, staleness_threshold_days: int | None = None) -> None:
        self._schemes: dict[str, GovernmentScheme] = {}
        self._last_refresh: datetime | None = None
        self._staleness_threshold_days = (
            staleness_threshold_days
            if staleness_threshold_days is not None
            else settings.staleness_threshold_days
        )

    def __len__(self) -> int:
        return len(self._schemes)

    def __contains__(self, scheme_id: object) -> bool:
        return scheme_id in self._schemes

    @property
    def last_refresh(self) -> datetime | None:
        return self._last_refresh

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def load_schemes(self, schemes: list[GovernmentScheme]) -> None:
        """Replace the catalog contents with ``schemes`` (no validation)."""
        self._schemes = {scheme.id: scheme for scheme in schemes}
        self._last_refresh = datetime.now(UTC)
        logger.info("catalog.loaded", count=len(self._schemes))

    def add_scheme(self, scheme: GovernmentScheme) -> SchemeValidationResult:
        """Validate and store ``scheme``; invalid schemes are not stored."""
        result = validate_scheme(scheme)
        if result.is_valid:
            self._schemes[scheme.id] = scheme
            logger.info("catalog.scheme_added", scheme_id=scheme.id, warnings=len(result.warnings))
        else:
            logger.warning("catalog.scheme_rejected", scheme_id=scheme.id, errors=result.errors)
        return result

    def update_scheme(self, scheme_id: str, updates: dict[str, Any]) -> GovernmentScheme | None:
        """Merge ``updates`` into an existing scheme and stamp ``last_updated``.

        Returns the stored scheme, or ``None`` when the id is unknown or the
        updated record fails validation (the stored record is kept).
        """
        existing = self._schemes.get(scheme_id)
        if existing is None:
            return None

        merged = {**existing.model_dump(), **updates, "id": scheme_id, "last_updated": datetime.now(UTC)}
        try:
            updated = GovernmentScheme.model_validate(merged)
        except ValidationError as exc:
            logger.warning("catalog.update_invalid", scheme_id=scheme_id, errors=exc.error_count())
            return None

        result = validate_scheme(updated)
        if not result.is_valid:
            logger.warning("catalog.update_rejected", scheme_id=scheme_id, errors=result.errors)
            return None

        self._schemes[scheme_id] = updated
        return updated

    def delete_scheme(self, scheme_id: str) -> bool:
        return self._schemes.pop(scheme_id, None) is not None

    def clear(self) -> None:
        self._schemes.clear()
        self._last_refresh = None

    def refresh_from_sources(self, path: Path | None = None) -> int:
        """Reload the catalog from the scheme JSON source.

        Returns the number of schemes loaded.
        """
        schemes = load_schemes(path)
        self.load_schemes(schemes)
        return len(schemes)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def snapshot(self) -> tuple[GovernmentScheme, ...]:
        """Every stored scheme, active or not, as an immutable sequence."""
        return tuple(self._schemes.values())

    def get_all_schemes(self) -> list[GovernmentScheme]:
        return [s for s in self._schemes.values() if s.is_active]

    def get_scheme_by_id(self, scheme_id: str) -> GovernmentScheme | None:
        return self._schemes.get(scheme_id)

    def get_schemes_by_category(self, category: BenefitType) -> list[GovernmentScheme]:
        """Active schemes whose primary or secondary category is ``category``."""
        return [
            s
            for s in self._schemes.values()
            if s.is_active and (s.benefit_type == category or category in s.benefit_categories)
        ]

    def get_schemes_by_state(self, state: str) -> list[GovernmentScheme]:
        """Central schemes plus schemes whose name or description mention ``state``."""
        needle = state.lower()
        results: list[GovernmentScheme] = []
        for scheme in self._schemes.values():
            if not scheme.is_active:
                continue
            if scheme.government_level == GovernmentLevel.CENTRAL:
                results.append(scheme)
                continue
            if needle in f"{scheme.name} {scheme.description}".lower():
                results.append(scheme)
        return results

    def search_schemes(self, query: str) -> list[GovernmentScheme]:
        """Keyword search over names, descriptions, agency and target groups.

        Terms shorter than three characters are ignored.  Schemes whose
        name contains the full query come first.
        """
        normalized = query.lower().strip()
        terms = [t for t in _WHITESPACE_RE.split(normalized) if len(t) >= _MIN_SEARCH_TERM_LENGTH]
        if not terms:
            return []

        hits: list[GovernmentScheme] = []
        for scheme in self._schemes.values():
            if not scheme.is_active:
                continue
            searchable = " ".join(
                [
                    scheme.name,
                    scheme.description,
                    scheme.simplified_description or "",
                    scheme.implementing_agency,
                    *scheme.target_demographics,
                ]
            ).lower()
            if any(term in searchable for term in terms):
                hits.append(scheme)

        hits.sort(key=lambda s: normalized not in s.name.lower())
        logger.debug("catalog.search", query=query, terms=len(terms), hits=len(hits))
        return hits

    def get_stale_schemes(self, threshold_days: int | None = None) -> list[GovernmentScheme]:
        threshold = threshold_days if threshold_days is not None else self._staleness_threshold_days
        return [s for s in self._schemes.values() if is_scheme_stale(s, threshold)]

    def get_stats(self) -> CatalogStats:
        schemes = list(self._schemes.values())
        active = [s for s in schemes if s.is_active]
        return CatalogStats(
            total_schemes=len(schemes),
            active_schemes=len(active),
            stale_schemes=len(self.get_stale_schemes()),
            last_refresh=self._last_refresh,
            schemes_by_category=dict(Counter(s.benefit_type for s in active)),
        )
