# =============================================================================
# PlantScan Backend
# routes/subscription.py - Subscription Routes
#
# Plan catalogue, the current user's entitlement and tier changes.
# =============================================================================

from flask import Blueprint, current_app
from flask_jwt_extended import jwt_required

from plantscan.constants import SUBSCRIPTION_PLANS
from plantscan.exceptions import AlreadySubscribedError
from plantscan.extensions import db, limiter
from plantscan.services.subscription import entitlement_for, subscribe
from plantscan.utils import get_current_user, success_response, error_response
from plantscan.decorators import validate_json, handle_db_errors

# Create blueprint
subscription_bp = Blueprint('subscription', __name__)


@subscription_bp.route('/plans', methods=['GET'])
@limiter.limit("100 per minute")
def get_plans():
    """List available subscription plans."""
    return success_response(data={'plans': SUBSCRIPTION_PLANS})


@subscription_bp.route('/', methods=['GET'])
@jwt_required()
def get_subscription():
    """
    Current user's entitlement.

    Returns:
        200: tier, status, expiry and premium access flag
    """
    user = get_current_user()
    if user is None:
        return error_response('User not found', status_code=404)

    return success_response(data=entitlement_for(user).to_dict())


@subscription_bp.route('/', methods=['POST'])
@jwt_required()
@limiter.limit("10 per minute")
@validate_json('tier')
@handle_db_errors
def change_subscription(data):
    """
    Move the current user onto a subscription tier.

    Request Body:
        tier (str): free or premium

    Returns:
        200: Updated entitlement
        400: Unknown tier
        409: Already on this plan
    """
    user = get_current_user()
    if user is None:
        return error_response('User not found', status_code=404)

    tier = str(data['tier']).lower().strip()

    try:
        entitlement = subscribe(
            user,
            tier,
            premium_days=current_app.config.get('PREMIUM_DURATION_DAYS', 30)
        )
    except ValueError as e:
        return error_response(
            str(e),
            details={'allowed': [plan['tier'] for plan in SUBSCRIPTION_PLANS]},
            status_code=400
        )
    except AlreadySubscribedError as e:
        return error_response(str(e), status_code=409)

    db.session.commit()

    current_app.logger.info(f"Subscription changed: user={user.id}, tier={tier}")

    return success_response(
        data=entitlement.to_dict(),
        message=f"Subscribed to the {tier} plan"
    )
