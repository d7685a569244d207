# =============================================================================
# PlantScan Backend
# knowledge/labels.py - Classifier Label Mapping
#
# Maps PlantVillage-style classifier labels ("Tomato___Late_blight") onto
# the plant, disease and pest they stand for. The order of the mapping is the
# class index used by the class selector.
# =============================================================================

import os
import json
import logging
from typing import Dict, Optional

from plantscan.knowledge.records import PlantLabel

# Configure logging
logger = logging.getLogger(__name__)


SCIENTIFIC_NAMES = {
    'Apple': 'Malus domestica',
    'Cherry': 'Prunus avium',
    'Corn': 'Zea mays',
    'Grape': 'Vitis vinifera',
    'Peach': 'Prunus persica',
    'Pepper': 'Capsicum annuum',
    'Potato': 'Solanum tuberosum',
    'Squash': 'Cucurbita pepo',
    'Strawberry': 'Fragaria × ananassa',
    'Tomato': 'Solanum lycopersicum'
}

# (label, plant, disease id, pest id)
_DEFAULT_LABELS = [
    ('Apple___Apple_scab', 'Apple', 'apple_scab', None),
    ('Apple___Black_rot', 'Apple', 'black_rot', None),
    ('Apple___Cedar_apple_rust', 'Apple', 'cedar_apple_rust', None),
    ('Apple___healthy', 'Apple', None, None),
    ('Cherry___Powdery_mildew', 'Cherry', 'powdery_mildew', None),
    ('Cherry___healthy', 'Cherry', None, None),
    ('Corn___Cercospora_leaf_spot Gray_leaf_spot', 'Corn', 'gray_leaf_spot', None),
    ('Corn___Common_rust', 'Corn', 'common_rust', None),
    ('Corn___Northern_Leaf_Blight', 'Corn', 'northern_leaf_blight', None),
    ('Corn___healthy', 'Corn', None, None),
    ('Grape___Black_rot', 'Grape', 'black_rot', None),
    ('Grape___Esca_(Black_Measles)', 'Grape', 'esca', None),
    ('Grape___Leaf_blight_(Isariopsis_Leaf_Spot)', 'Grape', 'grape_leaf_blight', None),
    ('Grape___healthy', 'Grape', None, None),
    ('Peach___Bacterial_spot', 'Peach', 'bacterial_spot', None),
    ('Peach___healthy', 'Peach', None, None),
    ('Pepper___Bacterial_spot', 'Pepper', 'bacterial_spot', None),
    ('Pepper___healthy', 'Pepper', None, None),
    ('Potato___Early_blight', 'Potato', 'early_blight', None),
    ('Potato___Late_blight', 'Potato', 'late_blight', None),
    ('Potato___healthy', 'Potato', None, None),
    ('Squash___Powdery_mildew', 'Squash', 'powdery_mildew', None),
    ('Strawberry___Leaf_scorch', 'Strawberry', 'leaf_scorch', None),
    ('Strawberry___healthy', 'Strawberry', None, None),
    ('Tomato___Bacterial_spot', 'Tomato', 'bacterial_spot', None),
    ('Tomato___Early_blight', 'Tomato', 'early_blight', None),
    ('Tomato___Late_blight', 'Tomato', 'late_blight', None),
    ('Tomato___Leaf_Mold', 'Tomato', 'leaf_mold', None),
    ('Tomato___Septoria_leaf_spot', 'Tomato', 'septoria_leaf_spot', None),
    ('Tomato___Spider_mites Two-spotted_spider_mite', 'Tomato', None, 'spider_mites'),
    ('Tomato___Target_Spot', 'Tomato', 'target_spot', None),
    ('Tomato___Tomato_Yellow_Leaf_Curl_Virus', 'Tomato', 'yellow_leaf_curl_virus', None),
    ('Tomato___Tomato_mosaic_virus', 'Tomato', 'mosaic_virus', None),
    ('Tomato___healthy', 'Tomato', None, None),
]


def default_label_map() -> Dict[str, PlantLabel]:
    """
    Build the built-in label mapping.

    Returns:
        Ordered dictionary of label -> PlantLabel
    """
    return {
        label: PlantLabel(
            label=label,
            plant_name=plant,
            scientific_name=SCIENTIFIC_NAMES.get(plant, 'Unknown'),
            disease_id=disease,
            pest_id=pest
        )
        for label, plant, disease, pest in _DEFAULT_LABELS
    }


def _label_from_entry(entry: dict) -> PlantLabel:
    plant = entry['plant_name']
    return PlantLabel(
        label=entry['label'],
        plant_name=plant,
        scientific_name=entry.get('scientific_name') or SCIENTIFIC_NAMES.get(plant, 'Unknown'),
        disease_id=entry.get('disease') or None,
        pest_id=entry.get('pest') or None
    )


def load_label_map(path: Optional[str] = None) -> Dict[str, PlantLabel]:
    """
    Load a label mapping from a JSON file, falling back to the defaults.

    The file holds ``{"labels": [{"label": ..., "plant_name": ...,
    "scientific_name": ..., "disease": ..., "pest": ...}, ...]}``.

    Args:
        path: Path to the class labels JSON file (optional)

    Returns:
        Ordered dictionary of label -> PlantLabel
    """
    if path and os.path.exists(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            labels = [_label_from_entry(entry) for entry in data.get('labels', [])]
            if labels:
                logger.info(f"Loaded {len(labels)} class labels from {path}")
                return {item.label: item for item in labels}
            logger.warning(f"No labels defined in {path}")
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Could not load class labels from {path}: {e}")

    return default_label_map()
