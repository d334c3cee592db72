"""
AI-assisted reflections: checklist summaries, positive reinterpretation
and daily feedback.

Each request follows the same path: moderate the input, build the prompt
for the user's tone, ask Gemini for a completion. The outcome is an
``AIResult`` instead of an exception so callers can tell a generated
answer from a moderation block or a fallback.
"""
import logging
from dataclasses import dataclass
from enum import Enum

import google.generativeai as genai
from flask import current_app

from . import moderation, prompts

logger = logging.getLogger(__name__)


class AIStatus(str, Enum):
    GENERATED = 'generated'
    BLOCKED = 'blocked'
    FALLBACK = 'fallback'
    NO_CONTENT = 'no_content'


@dataclass
class AIResult:
    status: AIStatus
    text: str = None

    @property
    def blocked(self):
        return self.status is AIStatus.BLOCKED


REINTERPRETATION_FALLBACKS = {
    'counselor': "Every experience today carries its own meaning. The way you keep growing, one day at a time, is truly admirable. ✨",
    'friend': "Honestly? Even the messy parts of today count. You're growing every single day, and it shows! ✨",
}

DAILY_FEEDBACK_FALLBACKS = {
    'counselor': "You worked hard today. Small efforts add up to real growth, and I'll be cheering you on tomorrow too. ✨",
    'friend': "You really pulled through today! Love how you keep at it. Let's crush tomorrow together! 💪",
}

NO_DIARY_MESSAGES = {
    'counselor': "You didn't write a diary today, and that's alright. Sometimes rest is what we need. Tomorrow is a fresh start. 🌅",
    'friend': "Huh, no diary today? No worries, taking a breather is fine too. Tomorrow's a brand new day, take it easy! 😊",
}


def _for_tone(messages, tone):
    return messages.get(tone, messages['counselor'])


def summary_fallback(activities, tone):
    """Hand-written summary used when generation fails, shaped by how much was done."""
    if tone == 'friend':
        if not activities:
            return "A chill day with nothing special? Honestly, that's a pretty great day too."
        if len(activities) == 1:
            return f"You got {activities[0]} done today, nice one! 🌟"
        if len(activities) <= 3:
            return f"{', '.join(activities)}. What a packed day, you did great! ✨"
        return f"Whoa, {', '.join(activities[:3])} and more? Busiest day ever, you're on fire! 🎉"

    if not activities:
        return "You spent a calm day without anything in particular. That alone makes it a good day."
    if len(activities) == 1:
        return f"You spent a meaningful day with {activities[0]}. 🌟"
    if len(activities) <= 3:
        return f"You spent a full day with {', '.join(activities)}. Well done today! ✨"
    return f"What a varied day! From {', '.join(activities[:3])} and more, it was full of energy. 🎉"


def init_app(app):
    """Configure the Gemini SDK once for the process."""
    api_key = app.config.get('GEMINI_API_KEY')
    if api_key:
        genai.configure(api_key=api_key)
        app.logger.info('Gemini API configured')
    else:
        app.logger.warning('GEMINI_API_KEY not set, AI replies will use fallback messages')


def get_generative_model(system_instruction):
    api_key = current_app.config.get('GEMINI_API_KEY')
    if not api_key:
        raise ValueError("GEMINI_API_KEY is not configured")
    return genai.GenerativeModel(current_app.config['GEMINI_MODEL'], system_instruction=system_instruction)


def generate_text(prompt, tone):
    """Single completion call; raises on any upstream problem or empty answer."""
    model = get_generative_model(prompts.system_prompt(tone))
    response = model.generate_content(
        prompt,
        generation_config=genai.GenerationConfig(
            max_output_tokens=current_app.config['AI_MAX_TOKENS'],
            temperature=current_app.config['AI_TEMPERATURE'],
        ),
        request_options={'timeout': current_app.config['AI_TIMEOUT_SECONDS']},
    )
    text = (response.text or '').strip() if response else ''
    if not text:
        raise ValueError("No response generated from AI model")
    return text


def _moderated_generation(text_to_check, prompt, tone, fallback):
    if text_to_check.strip() and not moderation.is_content_safe(text_to_check):
        logger.info("AI request blocked by moderation")
        return AIResult(AIStatus.BLOCKED)

    try:
        return AIResult(AIStatus.GENERATED, generate_text(prompt, tone))
    except Exception as e:
        logger.warning(f"AI generation failed, using fallback: {e}")
        return AIResult(AIStatus.FALLBACK, fallback)


def checklist_summary(user, activities, day):
    activities = [a.strip() for a in activities if a and a.strip()]
    tone = user.ai_tone
    return _moderated_generation(
        ', '.join(activities),
        prompts.build_checklist_summary_prompt(activities, day, tone),
        tone,
        summary_fallback(activities, tone),
    )


def positive_reinterpretation(user, content, day):
    tone = user.ai_tone
    return _moderated_generation(
        content,
        prompts.build_positive_reinterpretation_prompt(content, day, tone),
        tone,
        _for_tone(REINTERPRETATION_FALLBACKS, tone),
    )


def daily_feedback(user, content, day):
    """Feedback on a day's diary; with nothing written there is nothing to send upstream."""
    tone = user.ai_tone
    if not content or not content.strip():
        return AIResult(AIStatus.NO_CONTENT, _for_tone(NO_DIARY_MESSAGES, tone))

    return _moderated_generation(
        content,
        prompts.build_daily_feedback_prompt(content, day, tone),
        tone,
        _for_tone(DAILY_FEEDBACK_FALLBACKS, tone),
    )
