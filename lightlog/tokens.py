"""
JWT issuing and validation for bearer authentication.
"""
from datetime import datetime, timedelta, timezone

from flask import current_app
from jose import JWTError, jwt


def create_access_token(username, now=None):
    now = now or datetime.now(timezone.utc)
    expires = now + timedelta(seconds=current_app.config['JWT_EXPIRATION_SECONDS'])
    claims = {'sub': username, 'iat': now, 'exp': expires}
    return jwt.encode(claims, current_app.config['JWT_SECRET'], algorithm=current_app.config['JWT_ALGORITHM'])


def decode_username(token):
    """Return the username a token was issued for, or None if it is invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            current_app.config['JWT_SECRET'],
            algorithms=[current_app.config['JWT_ALGORITHM']],
        )
    except JWTError as e:
        current_app.logger.info(f'Rejected bearer token: {e}')
        return None
    return payload.get('sub')


def bearer_token(request):
    header = request.headers.get('Authorization', '')
    if header.startswith('Bearer '):
        return header[len('Bearer '):].strip() or None
    return None
