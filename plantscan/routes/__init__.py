# =============================================================================
# PlantScan Backend
# routes/__init__.py - Routes Package
#
# This package contains all API route blueprints organized by feature.
# =============================================================================

from .auth import auth_bp
from .scan import scan_bp
from .history import history_bp
from .knowledge import knowledge_bp
from .subscription import subscription_bp

__all__ = [
    'auth_bp',
    'scan_bp',
    'history_bp',
    'knowledge_bp',
    'subscription_bp'
]
