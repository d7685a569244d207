# =============================================================================
# PlantScan Backend
# knowledge/records.py - Knowledge Base Record Types
#
# Immutable reference records describing diseases, pests, their treatments
# and prevention strategies. Sequences are stored as tuples so records can be
# shared freely between reports.
# =============================================================================

from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any


@dataclass(frozen=True)
class Treatment:
    """A single way of treating a disease or pest."""
    id: str
    name: str
    description: str
    method: str  # chemical, organic, cultural, biological
    application: str
    frequency: str
    duration: str
    precautions: Tuple[str, ...] = ()
    effectiveness: int = 0  # 0-100

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'method': self.method,
            'application': self.application,
            'frequency': self.frequency,
            'duration': self.duration,
            'precautions': list(self.precautions),
            'effectiveness': self.effectiveness
        }


@dataclass(frozen=True)
class Prevention:
    """A preventive practice."""
    id: str
    name: str
    description: str
    methods: Tuple[str, ...] = ()
    timing: str = ''
    frequency: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'methods': list(self.methods),
            'timing': self.timing,
            'frequency': self.frequency
        }


@dataclass(frozen=True)
class DiseaseRecord:
    """
    Reference data for a plant disease.

    Looked up by ``id``; never mutated once the knowledge base is built.
    """
    id: str
    name: str
    scientific_name: str
    description: str
    severity: str  # low, medium, high, critical
    common_names: Tuple[str, ...] = ()
    symptoms: Tuple[str, ...] = ()
    causes: Tuple[str, ...] = ()
    treatments: Tuple[Treatment, ...] = ()
    prevention: Tuple[Prevention, ...] = ()

    def summary(self) -> Dict[str, Any]:
        """Minimal view shown to free-tier users."""
        return {'id': self.id, 'name': self.name, 'severity': self.severity}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'scientific_name': self.scientific_name,
            'common_names': list(self.common_names),
            'description': self.description,
            'symptoms': list(self.symptoms),
            'causes': list(self.causes),
            'treatments': [t.to_dict() for t in self.treatments],
            'prevention': [p.to_dict() for p in self.prevention],
            'severity': self.severity
        }


@dataclass(frozen=True)
class PestRecord:
    """Reference data for a plant pest."""
    id: str
    name: str
    scientific_name: str
    pest_type: str  # insect, fungus, bacteria, virus, mite, nematode
    description: str
    severity: str = 'medium'
    common_names: Tuple[str, ...] = ()
    symptoms: Tuple[str, ...] = ()
    damage: Tuple[str, ...] = ()
    treatments: Tuple[Treatment, ...] = ()
    prevention: Tuple[Prevention, ...] = ()

    def summary(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'severity': self.severity}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'scientific_name': self.scientific_name,
            'common_names': list(self.common_names),
            'type': self.pest_type,
            'description': self.description,
            'symptoms': list(self.symptoms),
            'damage': list(self.damage),
            'treatments': [t.to_dict() for t in self.treatments],
            'prevention': [p.to_dict() for p in self.prevention],
            'severity': self.severity
        }


@dataclass(frozen=True)
class PlantLabel:
    """
    One classifier label and the plant/disease/pest combination it stands for.

    ``disease_id`` is None for healthy labels and ``pest_id`` is None when no
    pest is involved.
    """
    label: str
    plant_name: str
    scientific_name: str
    disease_id: Optional[str] = None
    pest_id: Optional[str] = None

    @property
    def is_healthy(self) -> bool:
        return self.disease_id is None and self.pest_id is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'label': self.label,
            'plant_name': self.plant_name,
            'scientific_name': self.scientific_name,
            'disease': self.disease_id,
            'pest': self.pest_id
        }
