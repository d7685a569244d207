# =============================================================================
# PlantScan Backend
# routes/scan.py - Plant Scan Routes
#
# Handles plant scan endpoints: image upload, optional image hosting,
# analysis, history persistence and the entitlement-gated health report.
# =============================================================================

from flask import Blueprint, request, current_app

from plantscan.constants import MESSAGES
from plantscan.exceptions import ClassificationError, InvalidImageError, ImageUploadError
from plantscan.extensions import limiter
from plantscan.services.advice import full_advice
from plantscan.services.analysis import AnalysisService
from plantscan.services.features import image_fingerprint
from plantscan.services.image_host import ImgBBClient, encode_for_upload
from plantscan.services.report import HealthReport
from plantscan.services.repository import ScanRepository
from plantscan.services.subscription import entitlement_for
from plantscan.utils import (
    validate_scan_id,
    parse_client_timestamp,
    decode_base64_image,
    get_optional_user,
    success_response,
    error_response
)
from plantscan.decorators import (
    validate_file_upload,
    validate_json,
    handle_db_errors,
    rate_limit_key_user
)

# Create blueprint
scan_bp = Blueprint('scan', __name__)


def _analysis_service():
    service = current_app.config.get('ANALYSIS_SERVICE')
    if service is None:
        service = AnalysisService.from_config(current_app.config)
        current_app.config['ANALYSIS_SERVICE'] = service
    return service


def _as_bool(value, default=True):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def _host_image(image_data, fingerprint, image_url=None):
    """
    Return the reference stored with a scan.

    Uploads to ImgBB when a key is configured, otherwise keeps the client's
    image_url or falls back to a content reference.
    """
    client = ImgBBClient.from_config(current_app.config)
    if client is None:
        return image_url or f"sha256:{fingerprint}"

    return client.upload(
        encode_for_upload(image_data),
        album_id=current_app.config.get('IMGBB_ALBUM_ID') or None
    )


def _run_scan(image_data, scan_id=None, image_url=None, scan_date=None, save_history=True):
    """
    Shared scan flow for multipart and base64 requests.

    validate -> upload (optional) -> analyze -> persist -> respond
    """
    if scan_id is not None and not validate_scan_id(scan_id):
        return error_response(
            'Invalid scan_id',
            details={'field': 'scan_id', 'pattern': '[A-Za-z0-9_-]{8,64}'},
            status_code=400
        )

    parsed_date = parse_client_timestamp(scan_date)
    if scan_date and parsed_date is None:
        return error_response(
            'Invalid scan_date, expected ISO-8601',
            details={'field': 'scan_date'},
            status_code=400
        )

    try:
        fingerprint = image_fingerprint(image_data)
    except InvalidImageError as e:
        current_app.logger.warning(f"Rejected scan image: {e}")
        return error_response(MESSAGES['INVALID_IMAGE'], status_code=400)

    try:
        image_reference = _host_image(image_data, fingerprint, image_url)
    except ImageUploadError as e:
        current_app.logger.error(f"Image upload failed: {e}")
        return error_response(MESSAGES['UPLOAD_ERROR'], status_code=502)

    try:
        report = _analysis_service().analyze(
            image_reference,
            image_bytes=image_data,
            scan_id=scan_id,
            scan_date=parsed_date
        )
    except ClassificationError as e:
        current_app.logger.error(f"Scan analysis failed: {e}")
        return error_response(MESSAGES['ANALYSIS_FAILED'], status_code=422)

    user = get_optional_user()
    entitlement = entitlement_for(user)
    saved = created = False

    if user is not None and save_history:
        record, created = ScanRepository().save(report, user.id, image_url=image_reference)
        saved = True
        if not created:
            # Same scan_id was saved before; answer with the stored result
            report = HealthReport.from_dict(record.report_dict())

    data = report.to_dict(entitlement)
    if entitlement.has_premium_access():
        data['advice'] = full_advice(report)
    data['saved'] = saved
    data['created'] = created

    current_app.logger.info(
        f"Scan completed: {report.scan_id} - {report.label} "
        f"(health={report.overall_health}, saved={saved})"
    )

    return success_response(data=data, message=MESSAGES['ANALYSIS_SUCCESS'])


# =============================================================================
# Main Scan Endpoint
# =============================================================================

@scan_bp.route('/', methods=['POST'])
@limiter.limit("30 per minute", key_func=rate_limit_key_user)
@validate_file_upload(required=True)
@handle_db_errors
def scan(file):
    """
    Analyze an uploaded plant image.

    Request:
        Content-Type: multipart/form-data

        Fields:
            image (file): Image file (jpg, jpeg, png, gif, webp) - required
            scan_id (str): Client-generated id used to de-duplicate saves - optional
            scan_date (str): ISO-8601 capture time - optional
            image_url (str): Already hosted copy of the image - optional
            save_history (bool): Save to history when authenticated (default true)

    Returns:
        200: Health report (detail depends on the caller's subscription)
        400: Validation error or undecodable image
        422: Analysis failed
        502: Image host upload failed
    """
    return _run_scan(
        file.read(),
        scan_id=request.form.get('scan_id') or None,
        image_url=request.form.get('image_url') or None,
        scan_date=request.form.get('scan_date'),
        save_history=_as_bool(request.form.get('save_history'))
    )


# =============================================================================
# Base64 Scan Endpoint
# =============================================================================

@scan_bp.route('/base64', methods=['POST'])
@limiter.limit("30 per minute", key_func=rate_limit_key_user)
@validate_json('image_base64')
@handle_db_errors
def scan_base64(data):
    """
    Analyze a plant image sent as a base64 string (camera captures).

    Request Body:
        {
            "image_base64": "data:image/jpeg;base64,...",
            "scan_id": "3f0c...",          // optional
            "scan_date": "2024-05-01T...", // optional
            "image_url": "https://...",   // optional
            "save_history": true          // optional
        }

    Returns:
        Same as the multipart endpoint
    """
    try:
        image_data = decode_base64_image(str(data['image_base64']))
    except ValueError as e:
        current_app.logger.warning(f"Rejected base64 payload: {e}")
        return error_response(MESSAGES['INVALID_IMAGE'], status_code=400)

    return _run_scan(
        image_data,
        scan_id=data.get('scan_id') or None,
        image_url=data.get('image_url') or None,
        scan_date=data.get('scan_date'),
        save_history=_as_bool(data.get('save_history'))
    )


# =============================================================================
# Class Labels
# =============================================================================

@scan_bp.route('/labels', methods=['GET'])
@limiter.limit("100 per minute")
def get_labels():
    """List the classifier's labels and the conditions they map to."""
    service = _analysis_service()
    return success_response(data={
        'labels': [service.label_map[label].to_dict() for label in service.labels()],
        'classifier': service.info()
    })
