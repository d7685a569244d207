# =============================================================================
# PlantScan Backend
# services/subscription.py - Subscription Entitlements
#
# Resolves what a user is entitled to see. The resulting Entitlement is passed
# explicitly to report serialization and history queries.
# =============================================================================

import math
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from plantscan.constants import SUBSCRIPTION_TIERS
from plantscan.exceptions import AlreadySubscribedError

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_PREMIUM_DAYS = 30


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo on round trip
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class Entitlement:
    tier: str = 'free'
    status: str = 'active'
    expiry_date: Optional[datetime] = None

    def has_premium_access(self, now: Optional[datetime] = None) -> bool:
        if self.tier != 'premium' or self.status != 'active':
            return False
        if self.expiry_date is not None:
            now = now or datetime.now(timezone.utc)
            if _as_utc(self.expiry_date) < now:
                return False
        return True

    def days_until_expiry(self, now: Optional[datetime] = None) -> int:
        if self.expiry_date is None:
            return 0
        now = now or datetime.now(timezone.utc)
        remaining = (_as_utc(self.expiry_date) - now).total_seconds()
        return max(0, math.ceil(remaining / 86400))

    def to_dict(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        return {
            'tier': self.tier,
            'status': self.status,
            'expiry_date': self.expiry_date.isoformat() if self.expiry_date else None,
            'has_premium_access': self.has_premium_access(now),
            'days_until_expiry': self.days_until_expiry(now)
        }


FREE_ENTITLEMENT = Entitlement()


def entitlement_for(user) -> Entitlement:
    """
    Build the entitlement for a user (or anonymous caller).

    Args:
        user: User model instance or None

    Returns:
        Entitlement
    """
    if user is None:
        return FREE_ENTITLEMENT

    return Entitlement(
        tier=user.subscription_tier or 'free',
        status=user.subscription_status or 'active',
        expiry_date=_as_utc(user.subscription_expiry)
    )


def subscribe(user, tier: str, now: Optional[datetime] = None,
              premium_days: int = DEFAULT_PREMIUM_DAYS) -> Entitlement:
    """
    Move a user onto a subscription tier.

    Premium gets a fresh expiry ``premium_days`` from now; free clears it.
    The caller commits the session.

    Raises:
        ValueError: for an unknown tier
        AlreadySubscribedError: if the user is already on an active plan of
            this tier
    """
    if tier not in SUBSCRIPTION_TIERS:
        raise ValueError(f"Unknown subscription tier: '{tier}'")

    now = now or datetime.now(timezone.utc)
    current = entitlement_for(user)
    if current.tier == tier and (tier == 'free' or current.has_premium_access(now)):
        raise AlreadySubscribedError(f"Already subscribed to the {tier} plan")

    user.subscription_tier = tier
    user.subscription_status = 'active'
    user.subscription_expiry = now + timedelta(days=premium_days) if tier == 'premium' else None

    logger.info(f"User {user.id} subscribed to {tier}")

    return entitlement_for(user)
