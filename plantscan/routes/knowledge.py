# =============================================================================
# PlantScan Backend
# routes/knowledge.py - Knowledge Base Routes
#
# Read-only endpoints over the disease and pest knowledge base and the
# plants covered by the classifier labels.
# =============================================================================

from flask import Blueprint, request, current_app

from plantscan.exceptions import UnknownConditionError
from plantscan.extensions import limiter
from plantscan.knowledge import (
    get_disease,
    get_pest,
    list_diseases,
    list_pests,
    load_label_map
)
from plantscan.services.subscription import entitlement_for
from plantscan.utils import get_optional_user, success_response, error_response

# Create blueprint
knowledge_bp = Blueprint('knowledge', __name__)


def _label_map():
    service = current_app.config.get('ANALYSIS_SERVICE')
    if service is not None:
        return service.label_map
    return load_label_map()


def _record_view(record):
    """Full record for premium callers, summary otherwise."""
    if entitlement_for(get_optional_user()).has_premium_access():
        data = record.to_dict()
        data['premium'] = True
    else:
        data = record.summary()
        data['premium'] = False
    return data


# =============================================================================
# Diseases
# =============================================================================

@knowledge_bp.route('/diseases', methods=['GET'])
@limiter.limit("100 per minute")
def get_diseases():
    """
    List known diseases.

    Query Parameters:
        severity (str): Only diseases of this severity (optional)

    Returns:
        200: Disease summaries
    """
    severity = request.args.get('severity', '').lower().strip()

    diseases = [
        d.summary() for d in list_diseases()
        if not severity or d.severity == severity
    ]

    return success_response(data={'diseases': diseases, 'total': len(diseases)})


@knowledge_bp.route('/diseases/<string:disease_id>', methods=['GET'])
@limiter.limit("100 per minute")
def get_disease_detail(disease_id):
    """
    Get one disease. Treatments and prevention require premium.

    Returns:
        200: Disease record
        404: Unknown disease
    """
    try:
        disease = get_disease(disease_id)
    except UnknownConditionError as e:
        return error_response(str(e), status_code=404)

    return success_response(data=_record_view(disease))


# =============================================================================
# Pests
# =============================================================================

@knowledge_bp.route('/pests', methods=['GET'])
@limiter.limit("100 per minute")
def get_pests():
    """List known pests."""
    pests = [p.summary() for p in list_pests()]
    return success_response(data={'pests': pests, 'total': len(pests)})


@knowledge_bp.route('/pests/<string:pest_id>', methods=['GET'])
@limiter.limit("100 per minute")
def get_pest_detail(pest_id):
    """
    Get one pest. Treatments and prevention require premium.

    Returns:
        200: Pest record
        404: Unknown pest
    """
    try:
        pest = get_pest(pest_id)
    except UnknownConditionError as e:
        return error_response(str(e), status_code=404)

    return success_response(data=_record_view(pest))


# =============================================================================
# Plants
# =============================================================================

@knowledge_bp.route('/plants', methods=['GET'])
@limiter.limit("100 per minute")
def get_plants():
    """
    List plants covered by the classifier with the conditions it can report.

    Returns:
        200: Plants sorted by name
    """
    plants = {}
    for plant_label in _label_map().values():
        entry = plants.setdefault(plant_label.plant_name, {
            'name': plant_label.plant_name,
            'scientific_name': plant_label.scientific_name,
            'labels': [],
            'diseases': [],
            'pests': []
        })
        entry['labels'].append(plant_label.label)
        if plant_label.disease_id and plant_label.disease_id not in entry['diseases']:
            entry['diseases'].append(plant_label.disease_id)
        if plant_label.pest_id and plant_label.pest_id not in entry['pests']:
            entry['pests'].append(plant_label.pest_id)

    plants_list = [plants[name] for name in sorted(plants)]

    return success_response(data={'plants': plants_list, 'total': len(plants_list)})
