from datetime import datetime, timedelta, timezone

import pytest

from plantscan.exceptions import AlreadySubscribedError
from plantscan.models import User
from plantscan.services.subscription import (
    Entitlement,
    FREE_ENTITLEMENT,
    entitlement_for,
    subscribe
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_anonymous_user_is_free():
    assert entitlement_for(None) == FREE_ENTITLEMENT
    assert not FREE_ENTITLEMENT.has_premium_access(NOW)


def test_premium_access_rules():
    active = Entitlement('premium', 'active', NOW + timedelta(days=1))
    expired = Entitlement('premium', 'active', NOW - timedelta(seconds=1))
    inactive = Entitlement('premium', 'inactive', NOW + timedelta(days=1))
    open_ended = Entitlement('premium', 'active', None)

    assert active.has_premium_access(NOW)
    assert not expired.has_premium_access(NOW)
    assert not inactive.has_premium_access(NOW)
    assert open_ended.has_premium_access(NOW)


def test_naive_expiry_is_treated_as_utc():
    naive = Entitlement('premium', 'active', datetime(2024, 6, 2, 12, 0))
    assert naive.has_premium_access(NOW)


def test_days_until_expiry():
    assert Entitlement('premium', 'active', NOW + timedelta(days=3)).days_until_expiry(NOW) == 3
    assert Entitlement('premium', 'active', NOW + timedelta(hours=25)).days_until_expiry(NOW) == 2
    assert Entitlement('premium', 'active', NOW - timedelta(days=3)).days_until_expiry(NOW) == 0
    assert FREE_ENTITLEMENT.days_until_expiry(NOW) == 0


def test_to_dict():
    data = Entitlement('premium', 'active', NOW + timedelta(days=30)).to_dict(NOW)
    assert data['tier'] == 'premium'
    assert data['has_premium_access'] is True
    assert data['days_until_expiry'] == 30
    assert data['expiry_date'] == '2024-07-01T12:00:00+00:00'


def test_subscribe_to_premium_sets_expiry():
    user = User(email='a@example.com', subscription_tier='free', subscription_status='active')

    entitlement = subscribe(user, 'premium', now=NOW)

    assert user.subscription_tier == 'premium'
    assert user.subscription_expiry == NOW + timedelta(days=30)
    assert entitlement.has_premium_access(NOW)


def test_subscribe_twice_raises():
    user = User(email='a@example.com', subscription_tier='free', subscription_status='active')
    subscribe(user, 'premium', now=NOW)

    with pytest.raises(AlreadySubscribedError):
        subscribe(user, 'premium', now=NOW + timedelta(days=1))


def test_renew_after_expiry():
    user = User(email='a@example.com', subscription_tier='premium', subscription_status='active',
                subscription_expiry=NOW - timedelta(days=1))

    entitlement = subscribe(user, 'premium', now=NOW, premium_days=7)

    assert entitlement.days_until_expiry(NOW) == 7


def test_downgrade_clears_expiry():
    user = User(email='a@example.com', subscription_tier='premium', subscription_status='active',
                subscription_expiry=NOW + timedelta(days=5))

    entitlement = subscribe(user, 'free', now=NOW)

    assert user.subscription_expiry is None
    assert entitlement.tier == 'free'
    assert not entitlement.has_premium_access(NOW)


def test_already_free_raises():
    user = User(email='a@example.com', subscription_tier='free', subscription_status='active')
    with pytest.raises(AlreadySubscribedError):
        subscribe(user, 'free', now=NOW)


def test_unknown_tier_raises():
    user = User(email='a@example.com', subscription_tier='free', subscription_status='active')
    with pytest.raises(ValueError):
        subscribe(user, 'platinum', now=NOW)
