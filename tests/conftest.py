from types import SimpleNamespace

import pytest

from lightlog import create_app
from lightlog.auth import register_user
from lightlog.extensions import db
from lightlog.tokens import create_access_token


@pytest.fixture
def app():
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(app, username, nickname, password='secret123', tone='counselor'):
    with app.app_context():
        user = register_user(username, password, nickname)
        user.ai_tone = tone
        db.session.commit()
        token = create_access_token(username)
        return SimpleNamespace(
            id=user.id,
            username=username,
            password=password,
            headers={'Authorization': f'Bearer {token}'},
        )


@pytest.fixture
def user(app):
    return make_user(app, 'alice', 'Alice')


@pytest.fixture
def other_user(app):
    return make_user(app, 'bob', 'Bob')


@pytest.fixture
def auth_headers(user):
    return user.headers


class FakeModel:
    """Stands in for a Gemini model; records every prompt it receives."""

    def __init__(self, text='Generated reply', error=None):
        self.text = text
        self.error = error
        self.prompts = []

    def generate_content(self, prompt, **kwargs):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


@pytest.fixture
def fake_model(monkeypatch):
    model = FakeModel()
    monkeypatch.setattr('lightlog.ai.get_generative_model', lambda system_instruction: model)
    return model


class FakeOpenAI:
    """Stands in for the OpenAI client: moderation and transcription."""

    def __init__(self, flagged=False, transcription=None):
        self.flagged = flagged
        self.transcription = transcription
        self.moderated = []
        self.transcribed = []
        self.moderations = SimpleNamespace(create=self._moderate)
        self.audio = SimpleNamespace(transcriptions=SimpleNamespace(create=self._transcribe))

    def _moderate(self, input):
        self.moderated.append(input)
        result = SimpleNamespace(flagged=self.flagged, categories=None, category_scores=None)
        return SimpleNamespace(results=[result])

    def _transcribe(self, **kwargs):
        self.transcribed.append(kwargs)
        if isinstance(self.transcription, Exception):
            raise self.transcription
        return self.transcription


@pytest.fixture
def fake_openai(monkeypatch):
    client = FakeOpenAI()
    monkeypatch.setattr('lightlog.openai_client.get_openai_client', lambda: client)
    return client
