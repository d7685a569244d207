# =============================================================================
# PlantScan Backend
# services/report.py - Health Report Assembly
#
# Joins a selected class label with the knowledge base to produce a
# HealthReport. The health score is derived in exactly one place
# (health_score) from the severities of the detected conditions.
# =============================================================================

import math
import uuid
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List, Iterable, Sequence, Tuple

import numpy as np

from plantscan.constants import (
    MIN_CONFIDENCE,
    MAX_CONFIDENCE,
    HEALTHY_BASELINE,
    SEVERITY_PENALTIES,
    PEST_PENALTY
)
from plantscan.exceptions import ClassificationError, UnknownConditionError
from plantscan.knowledge import (
    DiseaseRecord,
    PestRecord,
    PlantLabel,
    get_disease,
    get_pest
)

# Configure logging
logger = logging.getLogger(__name__)


def compute_confidence(features: np.ndarray) -> float:
    """
    Confidence derived from feature spread: lower variance, higher confidence.

    Returns:
        Confidence in [0.70, 0.99]
    """
    variance = float(np.var(features)) if features.size else 1.0
    confidence = min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, 1.0 - variance))
    return round(confidence, 4)


def health_score(severities: Iterable[str], pest_count: int = 0) -> int:
    """
    Overall plant health on a 0-100 scale.

    Starts from the healthy baseline and subtracts a penalty for every
    disease (by severity) and every pest.

    Args:
        severities: Severity of each detected disease
        pest_count: Number of detected pests

    Returns:
        Integer score in [0, 100]
    """
    score = HEALTHY_BASELINE
    for severity in severities:
        score -= SEVERITY_PENALTIES.get(severity, SEVERITY_PENALTIES['medium'])
    score -= PEST_PENALTY * pest_count
    return max(0, min(100, score))


def build_recommendations(
    diseases: Sequence[DiseaseRecord],
    pests: Sequence[PestRecord]
) -> List[str]:
    recommendations = []

    for disease in diseases:
        recommendations.append(f"Apply appropriate treatment for {disease.name}")
    if diseases:
        recommendations.extend([
            'Improve air circulation around plants',
            'Avoid overhead watering',
            'Remove affected plant parts'
        ])

    for pest in pests:
        recommendations.append(f"Control {pest.name} using recommended methods")
    if pests:
        recommendations.extend([
            'Monitor plants regularly for pest activity',
            'Encourage beneficial insects',
            'Maintain plant health to resist pest damage'
        ])

    if not diseases and not pests:
        recommendations.extend([
            'Plant appears healthy - continue good care practices',
            'Monitor regularly for early signs of problems',
            'Maintain proper watering and nutrition'
        ])

    return recommendations


def build_next_steps(
    diseases: Sequence[DiseaseRecord],
    pests: Sequence[PestRecord]
) -> List[str]:
    next_steps = []

    if diseases:
        next_steps.extend([
            'Apply first treatment within 24-48 hours',
            'Monitor plant response over next 7 days',
            'Take follow-up photos to track progress',
            'Adjust treatment if no improvement seen'
        ])

    if pests:
        next_steps.extend([
            'Begin pest control measures immediately',
            'Check nearby plants for similar issues',
            'Reapply treatments as per schedule',
            'Evaluate effectiveness after 1 week'
        ])

    next_steps.append('Document findings for future reference')
    return next_steps


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp ('Z' suffix allowed) as an aware datetime.

    Naive values are taken as UTC. Empty values give None.

    Raises:
        TypeError: if value is not a string
        ValueError: if value is not ISO-8601
    """
    if value is None or value == '':
        return None
    if not isinstance(value, str):
        raise TypeError(f"Timestamp must be an ISO-8601 string, got {type(value).__name__}")

    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class HealthReport:
    """
    Structured output of one plant scan.

    ``is_healthy`` is computed from the detected conditions and cannot be set.
    Reports are immutable; a new scan produces a new report.
    """
    scan_id: str
    label: str
    plant_name: str
    scientific_name: str
    confidence: float
    diseases: Tuple[DiseaseRecord, ...]
    pests: Tuple[PestRecord, ...]
    overall_health: int
    recommendations: Tuple[str, ...]
    next_steps: Tuple[str, ...]
    scan_date: datetime
    image_reference: str

    @property
    def is_healthy(self) -> bool:
        return not self.diseases and not self.pests

    def to_dict(self, entitlement=None) -> Dict[str, Any]:
        """
        Serialize the report for storage or API responses.

        Args:
            entitlement: Entitlement of the viewer. None returns the full
                report (storage); a free entitlement hides detailed disease
                and pest records.

        Returns:
            dict: Report data dictionary
        """
        premium = entitlement is None or entitlement.has_premium_access()

        data = {
            'scan_id': self.scan_id,
            'label': self.label,
            'plant_name': self.plant_name,
            'scientific_name': self.scientific_name,
            'confidence': self.confidence,
            'is_healthy': self.is_healthy,
            'overall_health': self.overall_health,
            'recommendations': list(self.recommendations),
            'next_steps': list(self.next_steps),
            'scan_date': self.scan_date.isoformat(),
            'image_reference': self.image_reference,
            'premium': premium
        }

        if premium:
            data['diseases'] = [d.to_dict() for d in self.diseases]
            data['pests'] = [p.to_dict() for p in self.pests]
        else:
            data['diseases'] = [d.summary() for d in self.diseases]
            data['pests'] = [p.summary() for p in self.pests]

        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  label_map: Optional[Dict[str, PlantLabel]] = None) -> 'HealthReport':
        """
        Rebuild a report from a stored or client-held payload.

        Disease and pest records are re-read from the knowledge base by id.
        The health score, recommendations and next steps are recomputed from
        them.

        Args:
            data: Report payload as produced by to_dict
            label_map: When given, the payload's label must be mapped and
                agree with its plant name and conditions

        Raises:
            ClassificationError: if a disease or pest id is unknown
            ValueError: if confidence is not finite or outside
                [MIN_CONFIDENCE, MAX_CONFIDENCE], the label disagrees with
                label_map, or scan_date is not ISO-8601
            TypeError: if scan_date is not a string
        """
        try:
            diseases = tuple(get_disease(d['id']) for d in data.get('diseases', []))
            pests = tuple(get_pest(p['id']) for p in data.get('pests', []))
        except UnknownConditionError as e:
            raise ClassificationError(f"Stored report references {e}") from e

        confidence = float(data['confidence'])
        if not math.isfinite(confidence) or not MIN_CONFIDENCE <= confidence <= MAX_CONFIDENCE:
            raise ValueError(
                f"confidence must be between {MIN_CONFIDENCE} and {MAX_CONFIDENCE}, got {confidence}"
            )

        label = data.get('label') or ''
        plant_name = data['plant_name']
        scientific_name = data.get('scientific_name', 'Unknown')

        if label_map is not None and label:
            plant_label = label_map.get(label)
            if plant_label is None:
                raise ValueError(f"Label '{label}' is not in the class mapping")
            if plant_name != plant_label.plant_name:
                raise ValueError(f"plant_name '{plant_name}' does not match label '{label}'")
            expected = ({plant_label.disease_id} - {None}, {plant_label.pest_id} - {None})
            if expected != ({d.id for d in diseases}, {p.id for p in pests}):
                raise ValueError(f"Conditions do not match label '{label}'")
            scientific_name = plant_label.scientific_name

        return cls(
            scan_id=data['scan_id'],
            label=label,
            plant_name=plant_name,
            scientific_name=scientific_name,
            confidence=confidence,
            diseases=diseases,
            pests=pests,
            overall_health=health_score([d.severity for d in diseases], len(pests)),
            recommendations=tuple(build_recommendations(diseases, pests)),
            next_steps=tuple(build_next_steps(diseases, pests)),
            scan_date=parse_timestamp(data.get('scan_date')) or datetime.now(timezone.utc),
            image_reference=data.get('image_reference', '')
        )


def assemble_report(
    label: str,
    label_map: Dict[str, PlantLabel],
    features: np.ndarray,
    image_reference: str,
    scan_id: Optional[str] = None,
    scan_date: Optional[datetime] = None
) -> HealthReport:
    """
    Build a HealthReport for a selected class label.

    Args:
        label: Selected class label
        label_map: Mapping of label -> PlantLabel
        features: Feature vector the label was selected from
        image_reference: URL or content reference of the scanned image
        scan_id: Client-generated scan id (generated when missing)
        scan_date: Client timestamp of the scan (defaults to now, UTC)

    Returns:
        HealthReport

    Raises:
        ClassificationError: if the label is not mapped, or maps onto an
            unknown disease or pest
    """
    plant_label = label_map.get(label)
    if plant_label is None:
        raise ClassificationError(f"Label '{label}' is not in the class mapping")

    try:
        diseases = (get_disease(plant_label.disease_id),) if plant_label.disease_id else ()
        pests = (get_pest(plant_label.pest_id),) if plant_label.pest_id else ()
    except UnknownConditionError as e:
        raise ClassificationError(f"Label '{label}' references {e}") from e

    report = HealthReport(
        scan_id=scan_id or str(uuid.uuid4()),
        label=label,
        plant_name=plant_label.plant_name,
        scientific_name=plant_label.scientific_name,
        confidence=compute_confidence(features),
        diseases=diseases,
        pests=pests,
        overall_health=health_score([d.severity for d in diseases], len(pests)),
        recommendations=tuple(build_recommendations(diseases, pests)),
        next_steps=tuple(build_next_steps(diseases, pests)),
        scan_date=scan_date or datetime.now(timezone.utc),
        image_reference=image_reference
    )

    logger.info(
        f"Assembled report {report.scan_id}: {label} "
        f"(health={report.overall_health}, confidence={report.confidence:.2f})"
    )

    return report
