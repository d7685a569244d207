# =============================================================================
# PlantScan Backend
# services/__init__.py - Services Package
#
# This package contains business logic services: the analysis pipeline,
# scan persistence, subscriptions, treatment advice and image hosting.
# =============================================================================

from .analysis import AnalysisService
from .repository import ScanRepository
from .image_host import ImgBBClient

__all__ = ['AnalysisService', 'ScanRepository', 'ImgBBClient']
