"""
Error types raised by the service layer and the JSON handlers that turn
them into API responses.

Every error body has the same shape::

    {"error": "VALIDATION_ERROR", "message": "...", "timestamp": 1760000000000}
"""
import time

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from .extensions import db


class LightLogError(Exception):
    """Base class for errors that map onto a client-visible response."""

    status_code = 400
    code = 'INVALID_REQUEST'

    def __init__(self, message, status_code=None, code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code


class ValidationError(LightLogError):
    code = 'VALIDATION_ERROR'


class PermissionDenied(LightLogError):
    code = 'PERMISSION_DENIED'


class NotFound(LightLogError):
    status_code = 404
    code = 'NOT_FOUND'


class ModerationBlocked(LightLogError):
    code = 'INAPPROPRIATE_CONTENT'

    def __init__(self, message='The content contains inappropriate material.'):
        super().__init__(message)


class VoiceProcessingError(LightLogError):
    status_code = 422
    code = 'VOICE_PROCESSING_ERROR'


def json_body():
    """The request body as a JSON object; a list or scalar body is a validation error."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def text_field(data, name):
    value = data.get(name)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationError(f'"{name}" must be a string')
    return value


def error_body(code, message, status_code):
    response = jsonify({
        'error': code,
        'message': message,
        'timestamp': int(time.time() * 1000),
    })
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(LightLogError)
    def handle_lightlog_error(error):
        app.logger.warning(f'{error.code}: {error.message}')
        return error_body(error.code, error.message, error.status_code)

    @app.errorhandler(429)
    def handle_rate_limit(error):
        return error_body('RATE_LIMITED', 'Too many requests. Please try again later.', 429)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return error_body(error.name.upper().replace(' ', '_'), error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        app.logger.exception(f'Unhandled error: {error}')
        return error_body('INTERNAL_SERVER_ERROR', 'An unexpected error occurred. Please try again later.', 500)
