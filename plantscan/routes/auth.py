# =============================================================================
# PlantScan Backend
# routes/auth.py - Authentication Routes
#
# Account registration, login, token refresh and profile management.
# Uses JWT tokens with stringified user ids as identities.
# =============================================================================

from datetime import datetime, timezone
from flask import Blueprint, jsonify, current_app
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
    get_jwt_identity
)

from plantscan.extensions import db, bcrypt, limiter
from plantscan.models import User
from plantscan.services.subscription import entitlement_for
from plantscan.utils import (
    validate_email,
    validate_password,
    get_current_user,
    success_response,
    error_response
)
from plantscan.decorators import validate_json, handle_db_errors

# Create blueprint
auth_bp = Blueprint('auth', __name__)


def _token_payload(user, message):
    return {
        'success': True,
        'message': message,
        'access_token': create_access_token(identity=str(user.id)),
        'refresh_token': create_refresh_token(identity=str(user.id)),
        'user': user.to_dict(),
        'subscription': entitlement_for(user).to_dict()
    }


def _clean(value):
    return value.strip() if isinstance(value, str) else ''


# =============================================================================
# Registration & Login
# =============================================================================

@auth_bp.route('/register', methods=['POST'])
@limiter.limit("5 per minute")
@validate_json('email', 'password')
@handle_db_errors
def register(data):
    """
    Register a new account on the free tier.

    Request Body:
        email (str): Email address (required)
        password (str): Password (required, min 8 chars)
        first_name, last_name, phone (str): Optional profile fields

    Returns:
        201: Account created with tokens
        400: Validation error
        409: Email already exists
    """
    email = _clean(data.get('email')).lower()
    password = data.get('password') or ''

    if not validate_email(email):
        return error_response('Invalid email format', status_code=400)

    if User.query.filter_by(email=email).first():
        return error_response('Email already registered', status_code=409)

    is_valid, password_message = validate_password(password)
    if not is_valid:
        return error_response(password_message, status_code=400)

    user = User(
        email=email,
        password_hash=bcrypt.generate_password_hash(password).decode('utf-8'),
        first_name=_clean(data.get('first_name')) or None,
        last_name=_clean(data.get('last_name')) or None,
        phone=_clean(data.get('phone')) or None,
        is_active=True,
        subscription_tier='free',
        subscription_status='active'
    )

    db.session.add(user)
    db.session.commit()

    current_app.logger.info(f"New user registered: {email}")

    return jsonify(_token_payload(user, 'Registration successful')), 201


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
@validate_json('email', 'password')
@handle_db_errors
def login(data):
    """
    Authenticate and return JWT tokens.

    Returns:
        200: Login successful with tokens
        401: Invalid credentials
        403: Account inactive
    """
    email = _clean(data.get('email')).lower()
    password = data.get('password') or ''

    user = User.query.filter_by(email=email).first()

    if not user or not bcrypt.check_password_hash(user.password_hash, password):
        return error_response('Invalid email or password', status_code=401)

    if not user.is_active:
        return error_response('Account is deactivated. Please contact support.', status_code=403)

    user.last_login = datetime.now(timezone.utc)
    db.session.commit()

    current_app.logger.info(f"User logged in: {email}")

    return jsonify(_token_payload(user, 'Login successful')), 200


@auth_bp.route('/refresh', methods=['POST'])
@jwt_required(refresh=True)
def refresh():
    """
    Issue a new access token from a refresh token.

    Returns:
        200: New access token
        401: Unknown or inactive user
    """
    user = get_current_user()
    if not user or not user.is_active:
        return error_response('User not found or inactive', status_code=401)

    return jsonify({
        'success': True,
        'access_token': create_access_token(identity=get_jwt_identity())
    }), 200


# =============================================================================
# Profile
# =============================================================================

@auth_bp.route('/profile', methods=['GET'])
@jwt_required()
def get_profile():
    """Current user's profile with subscription status."""
    user = get_current_user()
    if not user:
        return error_response('User not found', status_code=404)

    data = user.to_dict()
    data['subscription'] = entitlement_for(user).to_dict()
    return success_response(data=data)


@auth_bp.route('/profile', methods=['PUT'])
@jwt_required()
@validate_json()
@handle_db_errors
def update_profile(data):
    """
    Update profile fields.

    Request Body:
        first_name, last_name, phone (str): Fields to change (optional)
    """
    user = get_current_user()
    if not user:
        return error_response('User not found', status_code=404)

    for field in ('first_name', 'last_name', 'phone'):
        if field in data:
            setattr(user, field, _clean(data[field]) or None)

    db.session.commit()

    return success_response(
        data=user.to_dict(),
        message='Profile updated successfully'
    )


@auth_bp.route('/change-password', methods=['POST'])
@jwt_required()
@validate_json('current_password', 'new_password')
@handle_db_errors
def change_password(data):
    """
    Change the current user's password.

    Returns:
        200: Password changed
        400: New password too weak
        401: Current password incorrect
    """
    user = get_current_user()
    if not user:
        return error_response('User not found', status_code=404)

    if not bcrypt.check_password_hash(user.password_hash, data['current_password']):
        return error_response('Current password is incorrect', status_code=401)

    is_valid, password_message = validate_password(data['new_password'])
    if not is_valid:
        return error_response(password_message, status_code=400)

    user.password_hash = bcrypt.generate_password_hash(data['new_password']).decode('utf-8')
    db.session.commit()

    current_app.logger.info(f"Password changed for user: {user.email}")

    return success_response(message='Password changed successfully')


@auth_bp.route('/logout', methods=['POST'])
@jwt_required()
def logout():
    """Tokens are stateless; the client discards them."""
    return success_response(message='Logged out successfully')
