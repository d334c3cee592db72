"""
Prompt templates for the AI features, one set per tone.
"""

SYSTEM_PROMPTS = {
    'counselor': (
        "You are a warm, professional psychological counselor reading a user's diary. "
        "Respond with empathy and calm, grounded encouragement. Keep answers short, "
        "speak directly to the user, and never diagnose or lecture."
    ),
    'friend': (
        "You are the user's close, easygoing friend reading their diary. "
        "Respond casually and playfully, cheer them on, and keep it short and genuine."
    ),
}

CHECKLIST_SUMMARY_PROMPTS = {
    'counselor': (
        "Summarize the day described by these activities in two or three gentle sentences, "
        "acknowledging the effort behind them and ending with a note of encouragement."
    ),
    'friend': (
        "Sum up this day in two or three upbeat sentences like a friend would, "
        "hyping up what they got done."
    ),
}

POSITIVE_REINTERPRETATION_PROMPTS = {
    'counselor': (
        "Offer a compassionate, positive reframing of the experiences in this diary entry. "
        "Validate the feelings first, then highlight growth or meaning the writer may have missed."
    ),
    'friend': (
        "Look at this diary entry from the bright side, like a good friend would. "
        "Be honest about the rough parts, then point out what went right."
    ),
}

DAILY_FEEDBACK_PROMPTS = {
    'counselor': (
        "Give brief, supportive feedback on today's diary: reflect back what stood out, "
        "recognize the effort, and suggest one small thing to carry into tomorrow."
    ),
    'friend': (
        "React to today's diary like a close friend: say what you noticed, cheer them on, "
        "and toss in one fun idea for tomorrow."
    ),
}


def _pick(prompts, tone):
    return prompts.get(tone, prompts['counselor'])


def system_prompt(tone):
    return _pick(SYSTEM_PROMPTS, tone)


def build_checklist_summary_prompt(activities, day, tone):
    return (
        f"Date: {day.isoformat()}\n"
        f"Things I did today: {', '.join(activities)}\n"
        f"\n"
        f"{_pick(CHECKLIST_SUMMARY_PROMPTS, tone)}"
    )


def build_positive_reinterpretation_prompt(content, day, tone):
    return (
        f"Date: {day.isoformat()}\n"
        f"Diary entry: {content}\n"
        f"\n"
        f"{_pick(POSITIVE_REINTERPRETATION_PROMPTS, tone)}"
    )


def build_daily_feedback_prompt(content, day, tone):
    return (
        f"Date: {day.isoformat()}\n"
        f"Today's diary:\n"
        f"{content}\n"
        f"\n"
        f"{_pick(DAILY_FEEDBACK_PROMPTS, tone)}"
    )
