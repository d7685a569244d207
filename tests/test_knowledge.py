import json

import pytest

from plantscan.constants import SEVERITY_LEVELS, PEST_TYPES
from plantscan.exceptions import UnknownConditionError
from plantscan.knowledge import (
    get_disease,
    get_pest,
    list_diseases,
    list_pests,
    default_label_map,
    load_label_map
)
from plantscan.knowledge.diseases import DISEASES
from plantscan.knowledge.pests import PESTS


def test_get_disease_returns_record():
    disease = get_disease('late_blight')
    assert disease.name == 'Late Blight'
    assert disease.severity == 'high'
    assert disease.treatments
    assert disease.prevention


def test_get_pest_returns_record():
    pest = get_pest('spider_mites')
    assert pest.pest_type == 'mite'
    assert pest.to_dict()['type'] == 'mite'


def test_unknown_disease_raises():
    with pytest.raises(UnknownConditionError) as excinfo:
        get_disease('not_a_disease')
    assert 'not_a_disease' in str(excinfo.value)


def test_unknown_condition_error_is_key_error():
    with pytest.raises(KeyError):
        get_pest('locusts')


def test_lists_sorted_by_id():
    disease_ids = [d.id for d in list_diseases()]
    pest_ids = [p.id for p in list_pests()]
    assert disease_ids == sorted(disease_ids)
    assert pest_ids == sorted(pest_ids)
    assert len(disease_ids) == len(DISEASES)
    assert len(pest_ids) == len(PESTS)


def test_records_use_known_severities_and_types():
    for disease in DISEASES.values():
        assert disease.severity in SEVERITY_LEVELS
    for pest in PESTS.values():
        assert pest.severity in SEVERITY_LEVELS
        assert pest.pest_type in PEST_TYPES


def test_summary_only_exposes_id_name_severity():
    assert get_disease('apple_scab').summary() == {
        'id': 'apple_scab',
        'name': 'Apple Scab',
        'severity': 'medium'
    }


def test_default_labels_reference_known_conditions():
    label_map = default_label_map()
    assert len(label_map) == 34
    for plant_label in label_map.values():
        if plant_label.disease_id:
            get_disease(plant_label.disease_id)
        if plant_label.pest_id:
            get_pest(plant_label.pest_id)


def test_default_label_examples():
    label_map = default_label_map()
    healthy = label_map['Tomato___healthy']
    assert healthy.is_healthy
    assert healthy.scientific_name == 'Solanum lycopersicum'

    late_blight = label_map['Potato___Late_blight']
    assert late_blight.plant_name == 'Potato'
    assert late_blight.disease_id == 'late_blight'

    mites = label_map['Tomato___Spider_mites Two-spotted_spider_mite']
    assert mites.disease_id is None
    assert mites.pest_id == 'spider_mites'
    assert not mites.is_healthy


def test_load_label_map_from_file(tmp_path):
    path = tmp_path / 'class_labels.json'
    path.write_text(json.dumps({'labels': [
        {'label': 'Rose___healthy', 'plant_name': 'Rose', 'scientific_name': 'Rosa'},
        {'label': 'Potato___Late_blight', 'plant_name': 'Potato', 'disease': 'late_blight'}
    ]}))

    label_map = load_label_map(str(path))

    assert list(label_map) == ['Rose___healthy', 'Potato___Late_blight']
    assert label_map['Rose___healthy'].is_healthy
    assert label_map['Potato___Late_blight'].scientific_name == 'Solanum tuberosum'


def test_load_label_map_falls_back_on_bad_file(tmp_path):
    path = tmp_path / 'class_labels.json'
    path.write_text('{not json')
    assert load_label_map(str(path)) == default_label_map()


def test_load_label_map_missing_file_uses_defaults(tmp_path):
    assert load_label_map(str(tmp_path / 'missing.json')) == default_label_map()
