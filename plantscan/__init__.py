# =============================================================================
# PlantScan Backend
# __init__.py - Package Root
#
# Plant health scanning API: image analysis pipeline, scan history,
# disease/pest knowledge base and subscription gating.
# =============================================================================

__version__ = '1.0.0'


def create_app(config_name=None):
    """Build the Flask application (see plantscan.app.create_app)."""
    from plantscan.app import create_app as _create_app
    return _create_app(config_name)


__all__ = ['create_app', '__version__']
