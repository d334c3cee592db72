"""
Database models: users and their diary entries.
"""
from datetime import datetime, timezone

from flask_login import UserMixin

from .extensions import db

AI_TONES = ('counselor', 'friend')
DEFAULT_AI_TONE = 'counselor'


class User(db.Model, UserMixin):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(150), unique=True, nullable=False)
    password = db.Column(db.String(150), nullable=False)
    nickname = db.Column(db.String(150), unique=True, nullable=False)
    ai_tone = db.Column(db.String(20), nullable=False, default=DEFAULT_AI_TONE)
    last_tone_change_date = db.Column(db.Date, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    entries = db.relationship('DiaryEntry', backref='author', lazy=True, cascade='all, delete-orphan')

    def can_change_tone(self, today):
        """A tone may be changed at most once per calendar day."""
        return self.last_tone_change_date is None or self.last_tone_change_date != today

    def __repr__(self):
        return f'<User {self.username}>'


class DiaryEntry(db.Model):
    __tablename__ = 'diaries'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    content = db.Column(db.Text, nullable=False)
    date = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Same-day entries are allowed, so (user_id, date) is indexed but not unique
    __table_args__ = (
        db.Index('idx_user_date', 'user_id', 'date'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'content': self.content,
            'date': self.date.isoformat(),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<DiaryEntry {self.id} {self.date}>'
