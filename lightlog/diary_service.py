"""
Diary operations for a single user: entries, search, statistics and
backup/restore. Every function takes the acting user explicitly.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from . import analytics
from .errors import NotFound, PermissionDenied, ValidationError
from .extensions import db
from .models import DiaryEntry

logger = logging.getLogger(__name__)

EXPORT_VERSION = '1.0'
PAST_OFFSETS = {
    '1month': 1,
    '3months': 3,
    '6months': 6,
    '12months': 12,
}


def parse_date(value, field_name='date'):
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid {field_name}: expected YYYY-MM-DD')


def _clean_content(content, max_length=None):
    if content is not None and not isinstance(content, str):
        raise ValidationError('Entry content must be text')
    content = (content or '').strip()
    if not content:
        raise ValidationError('Entry content cannot be empty!')
    if max_length is not None and len(content) > max_length:
        raise ValidationError(f'Entry is too long (maximum {max_length:,} characters)')
    return content


def create_entry(user, content, day, max_length=10000):
    entry = DiaryEntry(user_id=user.id, content=_clean_content(content, max_length), date=day)
    db.session.add(entry)
    db.session.commit()
    logger.info(f'Entry created by {user.username} (ID: {entry.id}, date: {day})')
    return entry


def update_entry(user, entry_id, content, max_length=10000):
    """Replace an entry's content; only its owner may do so."""
    entry = db.session.get(DiaryEntry, entry_id)
    if entry is None:
        raise NotFound('Diary not found')
    if entry.user_id != user.id:
        logger.warning(f'{user.username} tried to edit entry {entry_id} owned by another user')
        raise PermissionDenied('Permission denied')

    entry.content = _clean_content(content, max_length)
    db.session.commit()
    logger.info(f'Entry updated by {user.username} (ID: {entry.id})')
    return entry


def entries_for_date(user, day):
    return DiaryEntry.query.filter_by(user_id=user.id, date=day).order_by(DiaryEntry.id).all()


def all_entries(user):
    return DiaryEntry.query.filter_by(user_id=user.id)\
        .order_by(DiaryEntry.date.desc(), DiaryEntry.id.desc()).all()


def past_entries(user, today=None):
    """The first entry written exactly 1, 3, 6 and 12 months before today."""
    today = today or date.today()
    past = {}
    for key, months in PAST_OFFSETS.items():
        entries = entries_for_date(user, analytics.months_before(today, months))
        past[key] = entries[0] if entries else None
    return past


def search_entries(user, keyword=None, start_date=None, end_date=None):
    query = DiaryEntry.query.filter_by(user_id=user.id)

    keyword = (keyword or '').strip()
    if keyword:
        query = query.filter(DiaryEntry.content.ilike(f'%{keyword}%'))

    if start_date and end_date:
        query = query.filter(DiaryEntry.date.between(start_date, end_date))

    return query.order_by(DiaryEntry.date.desc(), DiaryEntry.id.desc()).all()


def statistics(user, today=None):
    today = today or date.today()
    dates = [row.date for row in db.session.query(DiaryEntry.date).filter(DiaryEntry.user_id == user.id)]
    longest, current = analytics.calculate_streaks(dates, today)

    return {
        'totalDiaries': len(dates),
        'currentMonthDiaries': analytics.count_in_month(dates, today),
        'longestStreak': longest,
        'currentStreak': current,
        'monthlyStats': analytics.monthly_counts(dates, today),
        'recentDays': analytics.recent_days(dates, today),
    }


def export_snapshot(user):
    """A portable copy of the user's profile and every entry, newest date first."""
    return {
        'user': {
            'username': user.username,
            'nickname': user.nickname,
            'createdAt': user.created_at.isoformat() if user.created_at else None,
        },
        'diaries': [
            {
                'content': entry.content,
                'date': entry.date.isoformat(),
                'createdAt': entry.created_at.isoformat() if entry.created_at else None,
            }
            for entry in all_entries(user)
        ],
        'exportedAt': datetime.now(timezone.utc).isoformat(),
        'version': EXPORT_VERSION,
    }


@dataclass
class ImportResult:
    imported: int = 0
    skipped: int = 0
    errors: list = field(default_factory=list)

    def to_dict(self):
        return {'imported': self.imported, 'skipped': self.skipped, 'errors': self.errors}


def _import_one(user, record, overwrite_existing, result):
    day = parse_date(record.get('date'))
    content = _clean_content(record.get('content'))

    existing = entries_for_date(user, day)
    if existing and not overwrite_existing:
        result.skipped += 1
        return

    for entry in existing:
        db.session.delete(entry)
    db.session.add(DiaryEntry(user_id=user.id, content=content, date=day))
    db.session.commit()
    result.imported += 1


def import_entries(user, records, overwrite_existing=False):
    """Restore entries one at a time; a failing record is reported and the rest still apply."""
    result = ImportResult()
    for record in records:
        try:
            if not isinstance(record, dict):
                raise ValidationError('Entry must be an object')
            _import_one(user, record, overwrite_existing, result)
        except Exception as e:
            db.session.rollback()
            label = record.get('date') if isinstance(record, dict) else None
            message = str(e)
            result.errors.append(f'{label}: {message}')
            logger.warning(f'Import of entry dated {label} failed for {user.username}: {message}')

    logger.info(
        f'Import by {user.username}: {result.imported} imported, '
        f'{result.skipped} skipped, {len(result.errors)} errors'
    )
    return result
