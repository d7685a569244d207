from datetime import datetime, timezone

import numpy as np
import pytest

from plantscan.exceptions import ClassificationError
from plantscan.knowledge import PlantLabel, default_label_map, get_disease
from plantscan.services.report import (
    HealthReport,
    assemble_report,
    build_next_steps,
    build_recommendations,
    compute_confidence,
    health_score
)
from plantscan.services.subscription import Entitlement

from conftest import make_report

PREMIUM = Entitlement(tier='premium', status='active')
FREE = Entitlement()


def test_confidence_bounds():
    assert compute_confidence(np.full(10, 0.5)) == 0.99
    assert compute_confidence(np.array([0.0, 1.0] * 5)) == 0.75
    assert compute_confidence(np.array([0.0, 0.99] * 5)) >= 0.70


def test_confidence_clamped_low():
    assert compute_confidence(np.array([0.0, 10.0])) == 0.70


def test_health_score():
    assert health_score([]) == 95
    assert health_score(['high']) == 50
    assert health_score(['low']) == 80
    assert health_score(['critical']) == 30
    assert health_score([], pest_count=1) == 80
    assert health_score(['critical', 'critical']) == 0


def test_healthy_label_report():
    report = make_report('Tomato___healthy', image_reference='file:///leaf.jpg')

    assert report.plant_name == 'Tomato'
    assert report.scientific_name == 'Solanum lycopersicum'
    assert report.is_healthy
    assert report.diseases == ()
    assert report.pests == ()
    assert report.overall_health == 95
    assert report.image_reference == 'file:///leaf.jpg'
    assert report.next_steps[-1] == 'Document findings for future reference'


def test_disease_label_report():
    report = make_report('Potato___Late_blight')

    assert report.plant_name == 'Potato'
    assert [d.id for d in report.diseases] == ['late_blight']
    assert not report.is_healthy
    assert report.overall_health == 50
    assert 'Apply appropriate treatment for Late Blight' in report.recommendations
    assert report.next_steps[0] == 'Apply first treatment within 24-48 hours'


def test_pest_label_report():
    report = make_report('Tomato___Spider_mites Two-spotted_spider_mite')

    assert report.diseases == ()
    assert [p.id for p in report.pests] == ['spider_mites']
    assert not report.is_healthy
    assert report.overall_health == 80


def test_is_healthy_matches_conditions_for_every_label():
    for label in default_label_map():
        report = make_report(label)
        assert report.is_healthy == (not report.diseases and not report.pests)
        assert 0.70 <= report.confidence <= 0.99
        assert 0 <= report.overall_health <= 100


def test_unmapped_label_raises():
    with pytest.raises(ClassificationError):
        assemble_report('Banana___Panama', default_label_map(), np.full(10, 0.5), 'ref')


def test_label_with_unknown_disease_raises():
    label_map = {
        'Rose___Blackspot': PlantLabel('Rose___Blackspot', 'Rose', 'Rosa', disease_id='blackspot')
    }
    with pytest.raises(ClassificationError):
        assemble_report('Rose___Blackspot', label_map, np.full(10, 0.5), 'ref')


def test_scan_id_and_date_defaults():
    report = assemble_report('Apple___healthy', default_label_map(), np.full(10, 0.5), 'ref')
    assert len(report.scan_id) == 36
    assert report.scan_date.tzinfo is not None


def test_client_scan_date_is_kept():
    when = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)
    report = make_report('Apple___healthy', scan_date=when)
    assert report.scan_date == when
    assert report.to_dict()['scan_date'] == '2024-05-01T08:30:00+00:00'


def test_report_is_immutable():
    report = make_report('Apple___healthy')
    with pytest.raises(AttributeError):
        report.overall_health = 10


def test_free_entitlement_hides_details():
    data = make_report('Potato___Late_blight').to_dict(FREE)

    assert data['premium'] is False
    assert data['diseases'] == [{'id': 'late_blight', 'name': 'Late Blight', 'severity': 'high'}]
    assert data['plant_name'] == 'Potato'
    assert data['overall_health'] == 50
    assert data['recommendations']


def test_premium_entitlement_shows_full_records():
    data = make_report('Potato___Late_blight').to_dict(PREMIUM)

    assert data['premium'] is True
    assert data['diseases'][0]['treatments']
    assert data['diseases'][0]['symptoms']


def test_expired_premium_is_gated():
    expired = Entitlement(
        tier='premium',
        status='active',
        expiry_date=datetime(2020, 1, 1, tzinfo=timezone.utc)
    )
    data = make_report('Potato___Late_blight').to_dict(expired)
    assert data['premium'] is False


def test_from_dict_rebuilds_report():
    report = make_report('Tomato___Spider_mites Two-spotted_spider_mite')
    rebuilt = HealthReport.from_dict(report.to_dict())
    assert rebuilt == report


def test_from_dict_accepts_summaries():
    report = make_report('Potato___Late_blight')
    rebuilt = HealthReport.from_dict(report.to_dict(FREE))
    assert rebuilt.diseases == (get_disease('late_blight'),)
    assert rebuilt.overall_health == 50


def test_from_dict_rejects_unknown_condition():
    data = make_report('Potato___Late_blight').to_dict()
    data['diseases'] = [{'id': 'mystery_rot'}]
    with pytest.raises(ClassificationError):
        HealthReport.from_dict(data)


def test_recommendations_for_healthy_plant():
    assert build_recommendations([], [])[0] == 'Plant appears healthy - continue good care practices'
    assert build_next_steps([], []) == ['Document findings for future reference']


@pytest.mark.parametrize('confidence', [42.0, -1, 0.5, 1.0, float('nan'), float('inf')])
def test_from_dict_rejects_confidence_out_of_range(confidence):
    data = dict(make_report('Apple___healthy').to_dict(), confidence=confidence)
    with pytest.raises(ValueError):
        HealthReport.from_dict(data)


def test_from_dict_accepts_confidence_bounds():
    for confidence in (0.70, 0.99):
        data = dict(make_report('Apple___healthy').to_dict(), confidence=confidence)
        assert HealthReport.from_dict(data).confidence == confidence


def test_from_dict_scan_date_types():
    data = make_report('Apple___healthy').to_dict()

    with pytest.raises(TypeError):
        HealthReport.from_dict(dict(data, scan_date=12345))
    with pytest.raises(ValueError):
        HealthReport.from_dict(dict(data, scan_date='yesterday'))

    rebuilt = HealthReport.from_dict(dict(data, scan_date='2024-05-01T08:30:00Z'))
    assert rebuilt.scan_date == datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)
    assert HealthReport.from_dict(dict(data, scan_date=None)).scan_date.tzinfo is not None


def test_from_dict_checks_label_against_mapping():
    labels = default_label_map()
    data = make_report('Potato___Late_blight').to_dict()

    assert HealthReport.from_dict(data, label_map=labels).label == 'Potato___Late_blight'

    with pytest.raises(ValueError):
        HealthReport.from_dict(dict(data, label='Potato___Frost'), label_map=labels)
    with pytest.raises(ValueError):
        HealthReport.from_dict(dict(data, plant_name='Tomato'), label_map=labels)
    with pytest.raises(ValueError):
        HealthReport.from_dict(dict(data, diseases=[]), label_map=labels)


def test_from_dict_recomputes_derived_fields():
    data = dict(
        make_report('Potato___Late_blight').to_dict(),
        recommendations=['Nothing to do'],
        next_steps=[],
        overall_health=100
    )

    rebuilt = HealthReport.from_dict(data)

    assert rebuilt.overall_health == 50
    assert 'Nothing to do' not in rebuilt.recommendations
    assert rebuilt.next_steps
