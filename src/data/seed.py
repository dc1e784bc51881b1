"""Loading utilities for the bundled government scheme catalog.

Parses ``schemes/sample_schemes.json`` (or a custom file, see
``CAA_SCHEME_DATA_PATH``) into validated
:class:`~src.models.scheme.GovernmentScheme` records.  Malformed records
are logged and skipped so one bad entry cannot block the whole catalog.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import ValidationError

from config.settings import settings
from src.models.scheme import GovernmentScheme

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

_DATA_DIR: Path = Path(__file__).resolve().parent / "schemes"
_SAMPLE_SCHEMES_PATH: Path = _DATA_DIR / "sample_schemes.json"


def default_scheme_path() -> Path:
    return settings.scheme_data_path or _SAMPLE_SCHEMES_PATH


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_schemes(path: Path | None = None) -> list[GovernmentScheme]:
    """Load government scheme data from a JSON file.

    Parameters
    ----------
    path:
        Path to a JSON array of scheme records.  Defaults to
        :func:`default_scheme_path`.

    Returns
    -------
    list[GovernmentScheme]
        Parsed schemes, in file order.

    Raises
    ------
    FileNotFoundError
        If the JSON file does not exist.
    json.JSONDecodeError
        If the JSON is malformed.
    """
    file_path = path or default_scheme_path()

    if not file_path.exists():
        raise FileNotFoundError(f"Scheme data file not found: {file_path}")

    with file_path.open("r", encoding="utf-8") as f:
        raw_schemes: list[dict] = json.load(f)

    schemes: list[GovernmentScheme] = []
    for raw in raw_schemes:
        try:
            schemes.append(GovernmentScheme.model_validate(raw))
        except ValidationError as exc:
            logger.warning(
                "seed.parse_error",
                scheme_id=raw.get("id", "unknown") if isinstance(raw, dict) else "unknown",
                errors=exc.error_count(),
            )

    logger.info("seed.loaded_schemes", count=len(schemes), source=str(file_path))
    return schemes
