"""
Shared OpenAI client for moderation and speech-to-text.
"""
import logging
from functools import lru_cache

from flask import current_app
from openai import OpenAI

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _build_client(api_key, timeout):
    client = OpenAI(api_key=api_key, timeout=timeout)
    logger.info("OpenAI client initialized")
    return client


def get_openai_client():
    """
    Get the OpenAI client configured for the current app.

    Raises:
        ValueError: If OPENAI_API_KEY is not configured
    """
    api_key = current_app.config.get('OPENAI_API_KEY')
    if not api_key:
        raise ValueError("OPENAI_API_KEY is not configured")
    return _build_client(api_key, current_app.config['OPENAI_TIMEOUT_SECONDS'])
