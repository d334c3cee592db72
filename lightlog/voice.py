"""
Voice-to-text: audio uploads are validated, transcribed with Whisper,
moderated and returned with a quality assessment the client can use to
decide whether to record again.
"""
import logging
import math
import os
import re
import time

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from . import moderation, openai_client
from .errors import ModerationBlocked, ValidationError, VoiceProcessingError
from .extensions import limiter

logger = logging.getLogger(__name__)

voice_bp = Blueprint('voice', __name__, url_prefix='/api/voice')

SUPPORTED_FORMATS = ('mp3', 'wav', 'm4a', 'flac', 'mp4', 'mpeg', 'mpga', 'oga', 'ogg', 'webm')
VIDEO_MIME_TYPES = ('video/mp4', 'video/mpeg', 'video/webm')
MAX_FILE_SIZE = 25 * 1024 * 1024
MAX_AUDIO_DURATION_SECONDS = 600

LOW_CONFIDENCE = 0.7
RETRY_CONFIDENCE = 0.5
MIN_TEXT_LENGTH = 3
REPEATED_CHARACTER = re.compile(r'(.)\1{4,}')
ONLY_SYMBOLS = re.compile(r'^[^\w\s]+$')


def file_extension(filename):
    _, ext = os.path.splitext(filename or '')
    return ext.lstrip('.').lower()


def is_audio_mime_type(content_type):
    mime = (content_type or '').split(';')[0].strip().lower()
    return mime.startswith('audio/') or mime in VIDEO_MIME_TYPES


def validate_audio_file(filename, content_type, size):
    if size == 0:
        raise ValidationError('The uploaded file is empty.')
    if size > MAX_FILE_SIZE:
        raise ValidationError('The file is too large. Files up to 25MB are supported.')
    if file_extension(filename) not in SUPPORTED_FORMATS:
        raise ValidationError(f'Unsupported file format. Supported formats: {", ".join(SUPPORTED_FORMATS)}')
    if not is_audio_mime_type(content_type):
        raise ValidationError('The uploaded file is not a valid audio file.')


def _field(obj, name):
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def calculate_confidence(segments):
    """Estimate confidence as exp(mean avg_logprob) over the transcript segments."""
    logprobs = [lp for lp in (_field(s, 'avg_logprob') for s in segments or []) if lp is not None]
    if not logprobs:
        return None
    return min(max(math.exp(sum(logprobs) / len(logprobs)), 0.0), 1.0)


def evaluate_quality(text, confidence=None):
    issues = []
    if confidence is not None and confidence < LOW_CONFIDENCE:
        issues.append('Speech recognition confidence is low')
    if len(text.strip()) < MIN_TEXT_LENGTH:
        issues.append('The transcribed text is too short')
    if REPEATED_CHARACTER.search(text):
        issues.append('Repeated characters were detected')
    if text.strip() and ONLY_SYMBOLS.match(text.strip()):
        issues.append('No meaningful text was detected')

    return {
        'isGoodQuality': not issues,
        'shouldRetry': len(issues) >= 2 or (confidence is not None and confidence < RETRY_CONFIDENCE),
        'issues': issues,
    }


def call_whisper(audio_bytes, filename):
    config = current_app.config
    try:
        client = openai_client.get_openai_client()
        return client.audio.transcriptions.create(
            model=config['WHISPER_MODEL'],
            file=(filename, audio_bytes),
            language=config['WHISPER_LANGUAGE'],
            response_format=config['WHISPER_RESPONSE_FORMAT'],
            temperature=0.0,
        )
    except Exception as e:
        raise VoiceProcessingError(f'Speech-to-text call failed: {e}') from e


def validate_transcript(text, duration=None):
    if not text.strip():
        raise VoiceProcessingError('No text could be extracted from the audio. Please speak more clearly.')
    if len(text) > current_app.config['MAX_TRANSCRIPT_LENGTH']:
        raise VoiceProcessingError('The transcribed text is too long. Please record a shorter message.')
    if duration is not None and duration > MAX_AUDIO_DURATION_SECONDS:
        raise VoiceProcessingError('The recording is too long. Recordings up to 10 minutes are supported.')
    if not moderation.is_content_safe(text):
        raise ModerationBlocked('The transcribed text contains inappropriate content.')


def convert_speech_to_text(audio_bytes, filename, content_type):
    started = time.monotonic()
    validate_audio_file(filename, content_type, len(audio_bytes))

    response = call_whisper(audio_bytes, filename)
    text = response if isinstance(response, str) else (_field(response, 'text') or '')
    duration = None if isinstance(response, str) else _field(response, 'duration')
    validate_transcript(text, duration)

    confidence = None if isinstance(response, str) else calculate_confidence(_field(response, 'segments'))
    transcribed = text.strip()
    return {
        'transcribedText': transcribed,
        'processingTimeMs': int((time.monotonic() - started) * 1000),
        'language': None if isinstance(response, str) else _field(response, 'language'),
        'confidence': confidence,
        'quality': evaluate_quality(transcribed, confidence),
    }


@voice_bp.route('/upload', methods=['POST'])
@login_required
@limiter.limit("20 per hour")
def upload_voice():
    upload = request.files.get('file')
    if upload is None:
        raise ValidationError('No audio file provided.')

    audio_bytes = upload.read()
    current_app.logger.info(
        f'Voice upload by {current_user.username}: {upload.filename} ({len(audio_bytes)} bytes)'
    )
    result = convert_speech_to_text(audio_bytes, upload.filename, upload.mimetype)
    current_app.logger.info(
        f'Voice transcription for {current_user.username} finished in {result["processingTimeMs"]} ms'
    )
    return jsonify(result)


@voice_bp.route('/health', methods=['GET'])
@login_required
def health_check():
    return jsonify({
        'status': 'healthy',
        'service': 'voice-to-text',
        'timestamp': str(int(time.time() * 1000)),
    })


@voice_bp.route('/supported-formats', methods=['GET'])
@login_required
def supported_formats():
    return jsonify({
        'supportedFormats': list(SUPPORTED_FORMATS),
        'maxFileSize': '25MB',
        'maxDuration': '10 minutes',
        'language': current_app.config['WHISPER_LANGUAGE'],
        'model': current_app.config['WHISPER_MODEL'],
    })
