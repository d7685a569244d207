# =============================================================================
# PlantScan Backend
# routes/history.py - Scan History Routes
#
# Handles the user's scan history: listing with filters, details, saving
# client-held reports, notes, deletion, statistics and premium treatment plans.
# =============================================================================

from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity

from plantscan.constants import HISTORY_STATUS_FILTERS
from plantscan.exceptions import ClassificationError
from plantscan.extensions import limiter
from plantscan.knowledge import default_label_map
from plantscan.services.advice import full_advice
from plantscan.services.report import HealthReport
from plantscan.services.repository import ScanRepository
from plantscan.services.subscription import entitlement_for
from plantscan.utils import (
    validate_scan_id,
    get_current_user,
    get_health_color,
    success_response,
    error_response,
    pagination_data
)
from plantscan.decorators import (
    paginated_response as paginate,
    validate_json,
    handle_db_errors,
    premium_required
)

# Create blueprint
history_bp = Blueprint('history', __name__)


def _history_item(record):
    item = record.to_dict()
    item['health_color'] = get_health_color(record.overall_health)
    return item


def _label_map():
    service = current_app.config.get('ANALYSIS_SERVICE')
    return service.label_map if service is not None else default_label_map()


def _stored_report(record):
    """Rebuild the HealthReport kept with a record."""
    return HealthReport.from_dict(record.report_dict())


# =============================================================================
# List History
# =============================================================================

@history_bp.route('/', methods=['GET'])
@jwt_required()
@limiter.limit("60 per minute")
@paginate(default_per_page=20, max_per_page=100)
def get_history(page, per_page):
    """
    Get the current user's scan history, newest first.

    Query Parameters:
        page (int): Page number (default: 1)
        per_page (int): Items per page (default: 20, max: 100)
        status (str): all, healthy, unhealthy or pest (default: all)
        q (str): Search plant, disease and pest names (optional)

    Free accounts only see their most recent FREE_HISTORY_LIMIT scans.

    Returns:
        200: Paginated list of scans
        400: Unknown status filter
    """
    user = get_current_user()
    if user is None:
        return error_response('User not found', status_code=404)

    status = request.args.get('status', 'all').lower().strip()
    if status not in HISTORY_STATUS_FILTERS:
        return error_response(
            f"Invalid status filter: '{status}'",
            details={'allowed': HISTORY_STATUS_FILTERS},
            status_code=400
        )

    search = request.args.get('q', '').strip() or None

    entitlement = entitlement_for(user)
    limit = None
    if not entitlement.has_premium_access():
        limit = current_app.config.get('FREE_HISTORY_LIMIT', 10)

    repository = ScanRepository()
    query = repository.query(user.id, status=status, search=search, limit=limit)
    pagination = query.paginate(page=page, per_page=per_page, error_out=False)

    data = pagination_data(pagination, _history_item)
    data['limited'] = limit is not None
    data['history_limit'] = limit
    data['total_saved'] = repository.count(user.id)

    return success_response(data=data)


# =============================================================================
# Save a Report
# =============================================================================

@history_bp.route('/', methods=['POST'])
@jwt_required()
@limiter.limit("30 per minute")
@validate_json('scan_id', 'plant_name', 'confidence')
@handle_db_errors
def save_scan(data):
    """
    Save a report returned by an earlier (e.g. anonymous) scan.

    Saving the same scan_id again returns the existing record.

    Request Body:
        A report payload as returned by /api/scan

    Returns:
        201: Scan saved
        200: Scan was already saved
        400: Malformed payload, confidence out of range or label mismatch
        422: Payload references unknown diseases or pests
    """
    user_id = int(get_jwt_identity())

    if not validate_scan_id(data.get('scan_id')):
        return error_response('Invalid scan_id', details={'field': 'scan_id'}, status_code=400)

    try:
        report = HealthReport.from_dict(data, label_map=_label_map())
    except ClassificationError as e:
        return error_response(str(e), status_code=422)
    except (KeyError, TypeError, ValueError) as e:
        return error_response('Malformed report payload', details={'reason': str(e)}, status_code=400)

    record, created = ScanRepository().save(report, user_id)

    return success_response(
        data=_history_item(record),
        message='Scan saved successfully' if created else 'Scan already saved',
        status_code=201 if created else 200
    )


# =============================================================================
# Scan Detail
# =============================================================================

@history_bp.route('/<scan_id>', methods=['GET'])
@jwt_required()
@limiter.limit("60 per minute")
def get_scan(scan_id):
    """
    Get one saved scan with its report, gated by the user's subscription.

    Returns:
        200: Scan details
        404: Scan not found
    """
    user = get_current_user()
    record = ScanRepository().get(user.id, scan_id) if user else None

    if record is None:
        return error_response('Scan not found', status_code=404)

    try:
        report = _stored_report(record)
    except ClassificationError as e:
        current_app.logger.error(f"Stored scan {scan_id} could not be rebuilt: {e}")
        return error_response('Stored scan could not be read', status_code=422)

    data = _history_item(record)
    data['report'] = report.to_dict(entitlement_for(user))

    return success_response(data=data)


# =============================================================================
# Update Notes
# =============================================================================

@history_bp.route('/<scan_id>', methods=['PUT'])
@jwt_required()
@limiter.limit("30 per minute")
@validate_json('notes')
@handle_db_errors
def update_scan(scan_id, data):
    """
    Update the notes of a saved scan.

    Request Body:
        notes (str): Updated notes

    Returns:
        200: Scan updated
        404: Scan not found
    """
    user_id = int(get_jwt_identity())

    notes = str(data['notes']).strip() or None
    record = ScanRepository().update_notes(user_id, scan_id, notes)

    if record is None:
        return error_response('Scan not found', status_code=404)

    return success_response(data=_history_item(record), message='Scan updated')


# =============================================================================
# Delete Scan
# =============================================================================

@history_bp.route('/<scan_id>', methods=['DELETE'])
@jwt_required()
@limiter.limit("30 per minute")
@handle_db_errors
def delete_scan(scan_id):
    """
    Delete a scan from history.

    Returns:
        200: Scan deleted
        404: Scan not found
    """
    user_id = int(get_jwt_identity())

    if not ScanRepository().delete(user_id, scan_id):
        return error_response('Scan not found', status_code=404)

    return success_response(message='Scan deleted successfully')


# =============================================================================
# Statistics
# =============================================================================

@history_bp.route('/stats', methods=['GET'])
@jwt_required()
@limiter.limit("60 per minute")
def get_history_stats():
    """
    Get statistics for the user's scan history.

    Returns:
        200: Totals, counts by plant, most common conditions, average health
    """
    user_id = int(get_jwt_identity())
    return success_response(data=ScanRepository().stats(user_id))


# =============================================================================
# Treatment Plan (Premium)
# =============================================================================

@history_bp.route('/<scan_id>/treatment-plan', methods=['GET'])
@jwt_required()
@premium_required
@limiter.limit("60 per minute")
def get_treatment_plan(scan_id, entitlement):
    """
    Treatment plan, priority actions and timeline for a saved scan.

    Returns:
        200: Treatment advice
        403: Premium subscription required
        404: Scan not found
    """
    user_id = int(get_jwt_identity())
    record = ScanRepository().get(user_id, scan_id)

    if record is None:
        return error_response('Scan not found', status_code=404)

    try:
        report = _stored_report(record)
    except ClassificationError as e:
        current_app.logger.error(f"Stored scan {scan_id} could not be rebuilt: {e}")
        return error_response('Stored scan could not be read', status_code=422)

    return success_response(data={
        'scan_id': record.scan_id,
        'plant_name': report.plant_name,
        'overall_health': report.overall_health,
        'report': report.to_dict(entitlement),
        'advice': full_advice(report)
    })
