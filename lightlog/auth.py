"""
Authentication routes for the LightLog API.
Includes registration, login, availability checks and bearer-token loading.
"""
from flask import Blueprint, current_app, jsonify, request

from .errors import ValidationError, error_body, json_body, text_field
from .extensions import bcrypt, db, limiter, login_manager
from .models import DEFAULT_AI_TONE, User
from .tokens import bearer_token, create_access_token, decode_username

# Create auth blueprint
auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@login_manager.request_loader
def load_user_from_request(req):
    """Resolve the user named by the bearer token; a bad token means anonymous."""
    token = bearer_token(req)
    if token is None:
        if req.path.startswith('/api/') and not req.path.startswith('/api/auth/'):
            current_app.logger.info(f'No bearer token provided for {req.path}')
        return None

    username = decode_username(token)
    if not username:
        return None
    return User.query.filter_by(username=username).first()


@login_manager.unauthorized_handler
def unauthorized():
    return error_body('UNAUTHORIZED', 'Authentication required.', 401)


def register_user(username, password, nickname):
    """Create a new account; usernames and nicknames are unique."""
    if not username or not password or not nickname:
        raise ValidationError('Username, password and nickname are required.')
    if User.query.filter_by(username=username).first():
        raise ValidationError('Username is already taken.')
    if User.query.filter_by(nickname=nickname).first():
        raise ValidationError('Nickname is already taken.')

    user = User(
        username=username,
        password=bcrypt.generate_password_hash(password).decode('utf-8'),
        nickname=nickname,
        ai_tone=DEFAULT_AI_TONE,
    )
    db.session.add(user)
    db.session.commit()
    return user


def authenticate(username, password):
    """Check credentials and return a fresh access token."""
    user = User.query.filter_by(username=username).first()
    if not user:
        raise ValidationError('User not found')
    if not password or not bcrypt.check_password_hash(user.password, password):
        raise ValidationError('Invalid password')
    return create_access_token(user.username)


def is_username_available(username):
    return User.query.filter_by(username=username).first() is None


def is_nickname_available(nickname):
    return User.query.filter_by(nickname=nickname).first() is None


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("10 per hour")
def register():
    data = json_body()
    username = text_field(data, 'username').strip()
    nickname = text_field(data, 'nickname').strip()

    current_app.logger.info(f'Registration attempt for username: {username}')
    user = register_user(username, text_field(data, 'password'), nickname)
    current_app.logger.info(f'User registered successfully: {username} (ID: {user.id})')

    return jsonify({'message': f'User registered successfully: {user.username}'})


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("20 per minute")
def login():
    data = json_body()
    username = text_field(data, 'username').strip()

    current_app.logger.info(f'Login attempt for username: {username}')
    try:
        token = authenticate(username, text_field(data, 'password'))
    except ValidationError:
        current_app.logger.warning(f'Failed login attempt for username: {username}')
        raise

    current_app.logger.info(f'User logged in successfully: {username}')
    return jsonify({'token': token})


@auth_bp.route('/check-username', methods=['GET'])
def check_username():
    available = is_username_available(request.args.get('username', '').strip())
    return jsonify({
        'available': available,
        'message': 'This username is available.' if available else 'This username is already in use.',
    })


@auth_bp.route('/check-nickname', methods=['GET'])
def check_nickname():
    available = is_nickname_available(request.args.get('nickname', '').strip())
    return jsonify({
        'available': available,
        'message': 'This nickname is available.' if available else 'This nickname is already in use.',
    })
