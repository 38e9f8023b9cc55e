"""Request-level contract shared by the Flask app and the serverless handler."""

from __future__ import annotations

import logging
from functools import lru_cache
from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional, Tuple

from .config import EduStatsSettings
from .enrichment import LanguageModelError, MissingCredentials
from .pipeline import EduStatsPipeline

logger = logging.getLogger(__name__)

Response = Tuple[HTTPStatus, Dict[str, Any]]

MISSING_PARAMETERS = "Missing parameters: school and program are required"


@lru_cache(maxsize=1)
def default_pipeline() -> EduStatsPipeline:
    """Process-wide pipeline; static tables are read once here."""

    return EduStatsPipeline(EduStatsSettings.from_env())


def read_params(params: Mapping[str, Any]) -> Tuple[str, str]:
    school = params.get("school") or ""
    program = params.get("program") or ""
    return str(school).strip(), str(program).strip()


def lookup(
    params: Mapping[str, Any],
    pipeline: Optional[EduStatsPipeline] = None,
) -> Response:
    school, program = read_params(params)
    if not school or not program:
        return HTTPStatus.BAD_REQUEST, {"error": MISSING_PARAMETERS}

    try:
        pipeline = pipeline or default_pipeline()
        result = pipeline.run(school, program)
    except MissingCredentials as exc:
        logger.error("%s", exc)
        return HTTPStatus.INTERNAL_SERVER_ERROR, {"error": str(exc)}
    except LanguageModelError as exc:
        return HTTPStatus.INTERNAL_SERVER_ERROR, {"error": str(exc)}
    except Exception:
        logger.exception("Unexpected error in /api/edu-stats")
        return HTTPStatus.INTERNAL_SERVER_ERROR, {"error": "Unexpected server error"}
    return HTTPStatus.OK, result.payload


__all__ = ["lookup", "read_params", "default_pipeline"]
