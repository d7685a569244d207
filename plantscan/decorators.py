# =============================================================================
# PlantScan Backend
# decorators.py - Request Decorators
#
# Pagination, JSON body and image upload checks, database error mapping,
# premium gating and the per-user rate limit key.
# =============================================================================

from functools import wraps
from flask import request, jsonify, current_app
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from sqlalchemy.exc import IntegrityError, OperationalError

from plantscan.constants import MESSAGES
from plantscan.extensions import db


def _reject(error, status_code=400, **extra):
    body = {'success': False, 'error': error}
    body.update(extra)
    return jsonify(body), status_code


def paginated_response(default_per_page=20, max_per_page=100):
    """
    Inject 'page' and 'per_page' query parameters into a list endpoint.

    per_page falls back to the default when not positive and is capped at
    max_per_page; a page below 1 is rejected.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            page = request.args.get('page', 1, type=int)
            if page < 1:
                return _reject('Page must be 1 or higher')

            per_page = request.args.get('per_page', default_per_page, type=int)
            if per_page < 1:
                per_page = default_per_page

            kwargs.update(page=page, per_page=min(per_page, max_per_page))
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def validate_json(*required_fields):
    """
    Require a JSON object body carrying every field in required_fields.

    The parsed body is passed to the view as 'data'.

    Example:
        @history_bp.route('/<scan_id>', methods=['PUT'])
        @validate_json('notes')
        def update_scan(scan_id, data):
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not request.is_json:
                return _reject('Send the request body as application/json')

            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return _reject('Request body must be a JSON object')

            missing = [name for name in required_fields if data.get(name) is None]
            if missing:
                return _reject('Missing required fields', missing_fields=missing)

            kwargs['data'] = data
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def handle_db_errors(f):
    """
    Turn constraint and connection failures into JSON responses.

    The session is rolled back first. Anything other than IntegrityError or
    OperationalError reaches the application error handlers untouched.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except IntegrityError as e:
            db.session.rollback()
            current_app.logger.error(f"Integrity error in {f.__name__}: {e}")

            reason = str(e.orig).lower()
            if 'unique' in reason or 'duplicate' in reason:
                return _reject('Record already exists', 409, type='duplicate_entry')
            if 'foreign key' in reason:
                return _reject('Linked record not found', 400, type='foreign_key_violation')
            return _reject('Record violates a database constraint', 400, type='integrity_error')
        except OperationalError as e:
            db.session.rollback()
            current_app.logger.error(f"Database unavailable in {f.__name__}: {e}")
            return _reject('Scan storage is unavailable', 503, type='database_error')

    return decorated_function


def validate_file_upload(required=True, allowed_extensions=None):
    """
    Check the multipart 'image' (or 'file') part of a scan upload.

    The FileStorage is passed to the view as 'file'; it is None when the
    upload is optional and absent.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            upload = request.files.get('image') or request.files.get('file')

            if upload is None or not upload.filename:
                if required:
                    return _reject('Image file is required', details={'field': 'image'})
                kwargs['file'] = None
                return f(*args, **kwargs)

            extensions = allowed_extensions or current_app.config.get(
                'ALLOWED_EXTENSIONS', {'png', 'jpg', 'jpeg', 'webp'}
            )
            stem, dot, suffix = upload.filename.rpartition('.')
            if not dot or suffix.lower() not in extensions:
                return _reject('Invalid file type', details={'allowed': sorted(extensions)})

            kwargs['file'] = upload
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def premium_required(fn):
    """
    Require an active premium subscription.

    Must be placed below @jwt_required(). The caller's entitlement is
    passed to the view as 'entitlement'.
    """
    from plantscan.services.subscription import entitlement_for
    from plantscan.utils import get_current_user

    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = get_current_user()
        entitlement = entitlement_for(user)

        if user is None or not entitlement.has_premium_access():
            return _reject(MESSAGES['PREMIUM_REQUIRED'], 403, type='premium_required')

        kwargs['entitlement'] = entitlement
        return fn(*args, **kwargs)
    return wrapper


def rate_limit_key_user():
    """Limit signed-in growers per account and everyone else per address."""
    try:
        verify_jwt_in_request(optional=True)
        user_id = get_jwt_identity()
    except (JWTExtendedException, PyJWTError):
        user_id = None

    return f"user:{user_id}" if user_id else request.remote_addr
