"""
LightLog: a journaling API with writing statistics, backup/restore and
AI-assisted reflections.
"""
import logging
import os

import click
from flask import Flask, jsonify
from flask.logging import default_handler

from .config import config
from .extensions import bcrypt, db, limiter, login_manager, migrate

LOG_FORMAT = '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    if app.testing:
        app.logger.setLevel(level)
        return

    file_logging_enabled = False

    if not app.debug and not app.config.get('LOG_TO_STDOUT'):
        try:
            os.makedirs('logs', exist_ok=True)
            file_handler = logging.FileHandler('logs/lightlog.log')
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            file_handler.setLevel(level)
            app.logger.addHandler(file_handler)
            file_logging_enabled = True
        except OSError as e:
            # File logging failed, use console only
            print(f"Warning: Could not set up file logging: {e}")

    # Console logging replaces Flask's default handler
    app.logger.removeHandler(default_handler)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING if file_logging_enabled else level)
    console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    app.logger.addHandler(console_handler)
    app.logger.setLevel(level)

    if file_logging_enabled:
        app.logger.info('LightLog startup')


def register_commands(app):
    @app.cli.command('seed-user')
    @click.option('--username', default='aaa')
    @click.option('--password', default='123qwe')
    @click.option('--nickname', default='developer')
    def seed_user(username, password, nickname):
        """Create the development account if it does not exist yet."""
        from .auth import register_user
        from .models import User

        if User.query.filter_by(username=username).first():
            click.echo(f'Default user already exists: username={username}')
            return
        register_user(username, password, nickname)
        click.echo(f'Default user created: username={username}')


def create_app(config_name=None):
    config_name = config_name or os.environ.get('FLASK_CONFIG', 'default')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)
    app.json.sort_keys = False

    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)

    from . import ai
    ai.init_app(app)

    from .auth import auth_bp
    from .diaries import diaries_bp
    from .errors import register_error_handlers
    from .users import users_bp
    from .voice import voice_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(diaries_bp)
    app.register_blueprint(voice_bp)
    register_error_handlers(app)
    register_commands(app)

    @app.route('/health')
    def health():
        db.session.execute(db.text('SELECT 1'))
        return jsonify({'ok': True})

    # Ensure database tables exist before serving
    with app.app_context():
        db.create_all()

    return app
