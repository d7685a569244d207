# =============================================================================
# PlantScan Backend
# services/analysis.py - Plant Analysis Service
#
# Runs the scan pipeline: feature extraction, class selection and report
# assembly. Loaded once at startup and shared by the scan routes.
# =============================================================================

import os
import logging
from datetime import datetime
from typing import Optional, Dict, Any, List

from plantscan.constants import FEATURE_VECTOR_LENGTH
from plantscan.knowledge import load_label_map
from plantscan.services.features import extract_features
from plantscan.services.classifier import ClassSelector
from plantscan.services.report import HealthReport, assemble_report

# Configure logging
logger = logging.getLogger(__name__)


class AnalysisService:
    """
    Plant health analysis service.

    This service handles:
    - Class label loading (JSON override or built-in defaults)
    - Feature extraction from image bytes or references
    - Class selection
    - Health report assembly

    Classification is a deterministic hash-based selector over the class
    table; it does not run a trained model.
    """

    CLASSIFIER_NAME = 'feature-hash'

    def __init__(
        self,
        model_path: Optional[str] = None,
        labels_file: str = 'class_labels.json',
        time_seeded: bool = False,
        feature_length: int = FEATURE_VECTOR_LENGTH,
        clock=None
    ):
        """
        Initialize the analysis service.

        Args:
            model_path: Directory holding the class labels file (optional)
            labels_file: Class labels file name
            time_seeded: Mix wall-clock time into class selection
            feature_length: Length of the extracted feature vector
            clock: Clock used by time-seeded selection (optional)
        """
        self.model_path = model_path
        self.feature_length = feature_length

        labels_path = os.path.join(model_path, labels_file) if model_path else None
        self.label_map = load_label_map(labels_path)
        self.selector = ClassSelector(
            list(self.label_map.keys()),
            time_seeded=time_seeded,
            clock=clock
        )

        logger.info(
            f"Analysis service ready with {len(self.label_map)} labels "
            f"(time_seeded={time_seeded})"
        )

    @classmethod
    def from_config(cls, config) -> 'AnalysisService':
        return cls(
            model_path=config.get('MODEL_PATH'),
            labels_file=config.get('CLASS_LABELS_FILE', 'class_labels.json'),
            time_seeded=config.get('CLASSIFIER_TIME_SEEDED', False),
            feature_length=config.get('FEATURE_VECTOR_LENGTH', FEATURE_VECTOR_LENGTH)
        )

    def is_loaded(self) -> bool:
        """Check if class labels are available."""
        return bool(self.label_map)

    def labels(self) -> List[str]:
        return list(self.label_map.keys())

    def info(self) -> Dict[str, Any]:
        return {
            'classifier': self.CLASSIFIER_NAME,
            'labels': len(self.label_map),
            'feature_length': self.feature_length,
            'time_seeded': self.selector.time_seeded
        }

    def analyze(
        self,
        image_reference: str,
        image_bytes: Optional[bytes] = None,
        scan_id: Optional[str] = None,
        scan_date: Optional[datetime] = None
    ) -> HealthReport:
        """
        Analyze a plant image.

        Args:
            image_reference: Hosted URL or content reference of the image
            image_bytes: Raw image bytes (optional)
            scan_id: Client-generated scan id (optional)
            scan_date: Client timestamp (optional)

        Returns:
            HealthReport

        Raises:
            InvalidImageError: if image bytes cannot be decoded
            ClassificationError: if the selected label cannot be assembled
        """
        features = extract_features(
            image_reference,
            image_bytes=image_bytes,
            length=self.feature_length
        )
        label = self.selector.select(features)

        return assemble_report(
            label,
            self.label_map,
            features,
            image_reference=image_reference,
            scan_id=scan_id,
            scan_date=scan_date
        )
