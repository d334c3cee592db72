"""
Diary routes: entries, search, statistics, backup/restore and AI reflections.
"""
from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from . import ai, diary_service
from .errors import ModerationBlocked, ValidationError, json_body, text_field
from .extensions import limiter

diaries_bp = Blueprint('diaries', __name__, url_prefix='/api/diaries')


def _ai_text(result):
    if result.blocked:
        raise ModerationBlocked()
    return result.text


@diaries_bp.route('', methods=['POST'])
@login_required
def create_diary():
    data = json_body()
    day = diary_service.parse_date(data.get('date'))
    entry = diary_service.create_entry(
        current_user, text_field(data, 'content'), day,
        max_length=current_app.config['MAX_ENTRY_LENGTH'],
    )
    return jsonify(entry.to_dict())


@diaries_bp.route('/<int:entry_id>', methods=['PUT'])
@login_required
def update_diary(entry_id):
    data = json_body()
    entry = diary_service.update_entry(
        current_user, entry_id, text_field(data, 'content'),
        max_length=current_app.config['MAX_ENTRY_LENGTH'],
    )
    return jsonify(entry.to_dict())


@diaries_bp.route('', methods=['GET'])
@login_required
def diaries_for_date():
    day = diary_service.parse_date(request.args.get('date'))
    entries = diary_service.entries_for_date(current_user, day)
    return jsonify([entry.to_dict() for entry in entries])


@diaries_bp.route('/past', methods=['GET'])
@login_required
def past_diaries():
    past = diary_service.past_entries(current_user)
    return jsonify({key: entry.to_dict() if entry else None for key, entry in past.items()})


@diaries_bp.route('/search', methods=['GET'])
@login_required
def search_diaries():
    start_date = request.args.get('startDate')
    end_date = request.args.get('endDate')
    results = diary_service.search_entries(
        current_user,
        keyword=request.args.get('keyword'),
        start_date=diary_service.parse_date(start_date, 'startDate') if start_date else None,
        end_date=diary_service.parse_date(end_date, 'endDate') if end_date else None,
    )
    return jsonify([entry.to_dict() for entry in results])


@diaries_bp.route('/statistics', methods=['GET'])
@login_required
def diary_statistics():
    current_app.logger.info(f'Statistics requested by {current_user.username}')
    return jsonify(diary_service.statistics(current_user))


@diaries_bp.route('/export', methods=['GET'])
@login_required
def export_data():
    current_app.logger.info(f'Export requested by {current_user.username}')
    return jsonify(diary_service.export_snapshot(current_user))


@diaries_bp.route('/import', methods=['POST'])
@login_required
@limiter.limit("10 per hour")
def import_data():
    data = json_body()
    records = data.get('diaries')
    if not isinstance(records, list):
        raise ValidationError('Invalid import format: "diaries" must be a list')

    overwrite_existing = data.get('overwriteExisting', False)
    if not isinstance(overwrite_existing, bool):
        raise ValidationError('Invalid import format: "overwriteExisting" must be true or false')

    result = diary_service.import_entries(current_user, records, overwrite_existing=overwrite_existing)
    body = result.to_dict()
    body['message'] = 'Data import completed.'
    return jsonify(body)


@diaries_bp.route('/summary', methods=['POST'])
@login_required
@limiter.limit("30 per hour")
def checklist_summary():
    data = json_body()
    activities = data.get('activities') or []
    if not isinstance(activities, list):
        raise ValidationError('"activities" must be a list')
    day = diary_service.parse_date(data.get('date'))

    result = ai.checklist_summary(current_user, [str(a) for a in activities], day)
    return jsonify({'summary': _ai_text(result)})


@diaries_bp.route('/positive-reinterpretation', methods=['POST'])
@login_required
@limiter.limit("30 per hour")
def positive_reinterpretation():
    data = json_body()
    content = text_field(data, 'content').strip()
    if not content:
        raise ValidationError('Diary content is required')
    day = diary_service.parse_date(data.get('date'))

    result = ai.positive_reinterpretation(current_user, content, day)
    return jsonify({'reinterpretation': _ai_text(result)})


@diaries_bp.route('/daily-feedback', methods=['POST'])
@login_required
@limiter.limit("30 per hour")
def daily_feedback():
    data = json_body()
    day = diary_service.parse_date(data.get('date'))

    entries = diary_service.entries_for_date(current_user, day)
    content = '\n\n'.join(entry.content for entry in entries) if entries else None
    result = ai.daily_feedback(current_user, content, day)
    feedback = _ai_text(result)

    return jsonify({
        'date': day.isoformat(),
        'diaryContent': content,
        'feedback': feedback,
        'hasDiary': content is not None,
        'message': 'Feedback generated.' if content is not None else 'No diary was written for this day.',
    })
