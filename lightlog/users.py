"""
User profile and AI tone preference routes.
"""
from datetime import date

from flask import Blueprint, current_app, jsonify
from flask_login import current_user, login_required

from .errors import ValidationError, json_body
from .extensions import db
from .models import AI_TONES

users_bp = Blueprint('users', __name__)

TONE_DESCRIPTIONS = [
    {
        'id': 'counselor',
        'name': 'Professional counselor',
        'description': 'Warm, professional advice in the voice of a counselor',
        'icon': '🧠',
    },
    {
        'id': 'friend',
        'name': 'Close friend',
        'description': 'Relaxed, playful encouragement from a close friend',
        'icon': '😊',
    },
]

TONE_CHANGED_MESSAGES = {
    'counselor': 'The AI will now respond as a professional counselor.',
    'friend': 'The AI will now respond as a close friend.',
}


def profile_for(user, today=None):
    today = today or date.today()
    return {
        'username': user.username,
        'nickname': user.nickname,
        'aiTone': user.ai_tone,
        'canChangeToneToday': user.can_change_tone(today),
        'createdAt': user.created_at.isoformat() if user.created_at else None,
    }


def change_ai_tone(user, tone, today=None):
    """Switch the user's AI tone, allowed at most once per calendar day."""
    today = today or date.today()
    if tone not in AI_TONES:
        raise ValidationError("Invalid AI tone. Must be 'counselor' or 'friend'.")
    if not user.can_change_tone(today):
        raise ValidationError('The AI tone can only be changed once per day.')

    user.ai_tone = tone
    user.last_tone_change_date = today
    db.session.commit()
    current_app.logger.info(f'AI tone changed to {tone} by {user.username}')
    return user


@users_bp.route('/api/users/profile', methods=['GET'])
@login_required
def get_profile():
    return jsonify(profile_for(current_user))


@users_bp.route('/api/users/ai-tone', methods=['PUT'])
@login_required
def update_ai_tone():
    data = json_body()
    change_ai_tone(current_user, data.get('aiTone'))
    return jsonify(profile_for(current_user))


@users_bp.route('/api/user/preferences', methods=['GET'])
@login_required
def get_preferences():
    return jsonify({
        'aiTone': current_user.ai_tone,
        'message': 'User preferences loaded.',
    })


@users_bp.route('/api/user/preferences', methods=['PUT'])
@login_required
def update_preferences():
    data = json_body()
    tone = data.get('aiTone')
    change_ai_tone(current_user, tone)
    return jsonify({
        'aiTone': current_user.ai_tone,
        'message': TONE_CHANGED_MESSAGES[tone],
    })


@users_bp.route('/api/user/ai-tones', methods=['GET'])
@login_required
def list_ai_tones():
    return jsonify({
        'tones': TONE_DESCRIPTIONS,
        'current': current_user.ai_tone,
    })
