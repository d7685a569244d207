# =============================================================================
# PlantScan Backend
# knowledge/__init__.py - Disease/Pest Knowledge Base
#
# Static reference data looked up by identifier. Unknown identifiers raise
# UnknownConditionError instead of falling back to another record.
# =============================================================================

from typing import List

from plantscan.exceptions import UnknownConditionError
from plantscan.knowledge.records import (
    Treatment,
    Prevention,
    DiseaseRecord,
    PestRecord,
    PlantLabel
)
from plantscan.knowledge.diseases import DISEASES
from plantscan.knowledge.pests import PESTS
from plantscan.knowledge.labels import default_label_map, load_label_map


def get_disease(disease_id: str) -> DiseaseRecord:
    """Look up a disease record by id."""
    try:
        return DISEASES[disease_id]
    except KeyError:
        raise UnknownConditionError('disease', disease_id) from None


def get_pest(pest_id: str) -> PestRecord:
    """Look up a pest record by id."""
    try:
        return PESTS[pest_id]
    except KeyError:
        raise UnknownConditionError('pest', pest_id) from None


def list_diseases() -> List[DiseaseRecord]:
    return [DISEASES[key] for key in sorted(DISEASES)]


def list_pests() -> List[PestRecord]:
    return [PESTS[key] for key in sorted(PESTS)]


__all__ = [
    'Treatment',
    'Prevention',
    'DiseaseRecord',
    'PestRecord',
    'PlantLabel',
    'get_disease',
    'get_pest',
    'list_diseases',
    'list_pests',
    'default_label_map',
    'load_label_map'
]
