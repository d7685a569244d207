# =============================================================================
# PlantScan Backend
# utils.py - Utility Functions
#
# Common utility functions used across the application including
# validation, image payload handling, identity lookup and response helpers.
# =============================================================================

import re
import base64
import binascii

from flask import jsonify
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from plantscan.constants import SEVERITY_COLORS
from plantscan.extensions import db
from plantscan.models import User
from plantscan.services.advice import severity_level
from plantscan.services.report import parse_timestamp


# =============================================================================
# Validation Functions
# =============================================================================

def validate_email(email: str) -> bool:
    """
    Validate email format using regex pattern.

    Args:
        email: Email address to validate

    Returns:
        bool: True if valid email format, False otherwise
    """
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return re.match(pattern, email) is not None


def validate_password(password: str) -> tuple[bool, str]:
    """
    Validate password strength requirements.

    Requirements:
    - At least 8 characters
    - At least 1 uppercase letter
    - At least 1 lowercase letter
    - At least 1 number

    Returns:
        tuple: (is_valid: bool, message: str)
    """
    if len(password) < 8:
        return False, "Password must be at least 8 characters long"
    if not re.search(r'[A-Z]', password):
        return False, "Password must contain at least one uppercase letter"
    if not re.search(r'[a-z]', password):
        return False, "Password must contain at least one lowercase letter"
    if not re.search(r'\d', password):
        return False, "Password must contain at least one number"
    return True, "Password is valid"


def validate_scan_id(scan_id: str) -> bool:
    """Scan ids are 8-64 characters of letters, digits, '-' or '_'."""
    if not isinstance(scan_id, str):
        return False
    return re.fullmatch(r'[A-Za-z0-9_-]{8,64}', scan_id) is not None


def parse_client_timestamp(value):
    """
    Parse an ISO-8601 client timestamp.

    Returns:
        datetime in UTC, or None when value is empty or malformed
    """
    try:
        return parse_timestamp(value)
    except (TypeError, ValueError):
        return None


# =============================================================================
# Image Payload Functions
# =============================================================================

def decode_base64_image(base64_string: str) -> bytes:
    """
    Decode a base64 image, with or without a data URI prefix.

    Raises:
        ValueError: if the string is not valid base64
    """
    if ',' in base64_string:
        base64_string = base64_string.split(',', 1)[1]

    try:
        return base64.b64decode(base64_string, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e


# =============================================================================
# Identity Helpers
# =============================================================================

def get_optional_user():
    """
    Return the authenticated user, or None for anonymous requests.

    Invalid or missing tokens are treated as anonymous.
    """
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError):
        return None

    identity = get_jwt_identity()
    if not identity:
        return None
    return db.session.get(User, int(identity))


def get_current_user():
    """Return the user for a request already guarded by jwt_required."""
    return db.session.get(User, int(get_jwt_identity()))


# =============================================================================
# Response Helpers
# =============================================================================

def success_response(data=None, message=None, status_code=200):
    """
    Create a standardized success response.

    Args:
        data: Response data (dict or list)
        message: Success message
        status_code: HTTP status code (default 200)

    Returns:
        tuple: (response, status_code)
    """
    response = {
        'success': True,
        'status': 'success'
    }

    if data is not None:
        response['data'] = data
    if message:
        response['message'] = message

    return jsonify(response), status_code


def error_response(error, details=None, status_code=400):
    """
    Create a standardized error response.

    Args:
        error: Error message
        details: Additional error details
        status_code: HTTP status code (default 400)

    Returns:
        tuple: (response, status_code)
    """
    response = {
        'success': False,
        'status': 'error',
        'error': error
    }

    if details:
        response['details'] = details

    return jsonify(response), status_code


def pagination_data(pagination, serializer):
    """
    Build the paginated payload for a Flask-SQLAlchemy pagination object.

    Args:
        pagination: Result of ``query.paginate``
        serializer: Function to serialize each item

    Returns:
        dict: Paginated response data
    """
    return {
        'items': [serializer(item) for item in pagination.items],
        'page': pagination.page,
        'per_page': pagination.per_page,
        'total': pagination.total,
        'pages': pagination.pages,
        'has_next': pagination.has_next,
        'has_prev': pagination.has_prev
    }


# =============================================================================
# Misc Helpers
# =============================================================================

def get_health_color(score: int) -> str:
    """
    Get color code for a health score.

    Args:
        score: Overall health (0-100)

    Returns:
        str: Hex color code
    """
    return SEVERITY_COLORS.get(severity_level(score), '#6B7280')  # Gray default
