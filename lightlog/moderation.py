"""
Content moderation through the OpenAI moderation endpoint.

Moderation fails open: when the endpoint itself cannot be reached or
answers with nothing, the content is treated as safe.
"""
import logging
from dataclasses import dataclass, field

from . import openai_client

logger = logging.getLogger(__name__)


@dataclass
class ModerationResult:
    flagged: bool
    categories: dict = field(default_factory=dict)
    category_scores: dict = field(default_factory=dict)


SAFE = ModerationResult(flagged=False)


def check_content(text):
    try:
        client = openai_client.get_openai_client()
        response = client.moderations.create(input=text)
    except Exception as e:
        logger.warning(f"Moderation call failed, treating content as safe: {e}")
        return SAFE

    if not response.results:
        return SAFE

    result = response.results[0]
    return ModerationResult(
        flagged=bool(result.flagged),
        categories=result.categories.model_dump() if result.categories else {},
        category_scores=result.category_scores.model_dump() if result.category_scores else {},
    )


def is_content_safe(text):
    return not check_content(text).flagged
