import pytest

from plantscan.extensions import db
from plantscan.models import User, ScanRecord
from plantscan.services.repository import ScanRepository

from conftest import make_report


@pytest.fixture
def user(app):
    user = User(email='grower@example.com', password_hash='x')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def repo(app):
    return ScanRepository()


def test_save_creates_record(repo, user):
    report = make_report('Potato___Late_blight', scan_id='scan-late-blight')

    record, created = repo.save(report, user.id)

    assert created is True
    assert record.scan_id == 'scan-late-blight'
    assert record.plant_name == 'Potato'
    assert record.is_healthy is False
    assert record.overall_health == 50
    assert record.image_url == report.image_reference
    assert record.to_dict()['diseases'] == ['late_blight']
    assert record.report_dict()['scan_id'] == 'scan-late-blight'
    assert record.created_at is not None


def test_second_save_returns_existing(repo, user):
    report = make_report('Tomato___healthy', scan_id='scan-duplicate')

    first, created_first = repo.save(report, user.id)
    second, created_second = repo.save(report, user.id)

    assert created_first is True
    assert created_second is False
    assert first.id == second.id
    assert ScanRecord.query.filter_by(scan_id='scan-duplicate').count() == 1


def test_concurrent_save_resolves_to_single_record(repo, user, monkeypatch):
    report = make_report('Tomato___healthy', scan_id='scan-race')
    winner, _ = ScanRepository().save(report, user.id)

    # Simulate a request that checked before the other insert landed
    real_get = repo.get
    calls = []

    def stale_get(user_id, scan_id):
        calls.append(scan_id)
        if len(calls) == 1:
            return None
        return real_get(user_id, scan_id)

    monkeypatch.setattr(repo, 'get', stale_get)

    record, created = repo.save(report, user.id)

    assert created is False
    assert record.id == winner.id
    assert len(calls) == 2
    assert ScanRecord.query.filter_by(scan_id='scan-race').count() == 1


def test_same_scan_id_for_different_users(repo, user):
    other = User(email='other@example.com', password_hash='x')
    db.session.add(other)
    db.session.commit()

    report = make_report('Apple___healthy', scan_id='shared-scan-id')
    _, created_a = repo.save(report, user.id)
    _, created_b = repo.save(report, other.id)

    assert created_a and created_b


def test_explicit_image_url(repo, user):
    report = make_report('Apple___healthy')
    record, _ = repo.save(report, user.id, image_url='https://i.ibb.co/x/y.jpg')
    assert record.image_url == 'https://i.ibb.co/x/y.jpg'


def test_update_notes_and_delete(repo, user):
    report = make_report('Apple___healthy', scan_id='scan-notes')
    repo.save(report, user.id)

    record = repo.update_notes(user.id, 'scan-notes', 'Checked again on Monday')
    assert record.notes == 'Checked again on Monday'

    assert repo.update_notes(user.id, 'missing-scan', 'x') is None
    assert repo.delete(user.id, 'scan-notes') is True
    assert repo.delete(user.id, 'scan-notes') is False
    assert repo.get(user.id, 'scan-notes') is None


def test_query_filters(repo, user):
    repo.save(make_report('Tomato___healthy', scan_id='scan-healthy'), user.id)
    repo.save(make_report('Potato___Late_blight', scan_id='scan-blight'), user.id)
    repo.save(make_report('Tomato___Spider_mites Two-spotted_spider_mite', scan_id='scan-mites'), user.id)

    def ids(**kwargs):
        return {r.scan_id for r in repo.query(user.id, **kwargs).all()}

    assert ids() == {'scan-healthy', 'scan-blight', 'scan-mites'}
    assert ids(status='healthy') == {'scan-healthy'}
    assert ids(status='unhealthy') == {'scan-blight', 'scan-mites'}
    assert ids(status='pest') == {'scan-mites'}
    assert ids(search='late blight') == {'scan-blight'}
    assert ids(search='SPIDER') == {'scan-mites'}
    assert ids(search='tomato') == {'scan-healthy', 'scan-mites'}


def test_query_limit_keeps_most_recent(repo, user):
    for i in range(5):
        repo.save(make_report('Apple___healthy', scan_id=f'scan-order-{i}'), user.id)

    recent = [r.scan_id for r in repo.query(user.id, limit=2).all()]

    assert recent == ['scan-order-4', 'scan-order-3']


def test_stats(repo, user):
    repo.save(make_report('Tomato___healthy'), user.id)
    repo.save(make_report('Potato___Late_blight'), user.id)
    repo.save(make_report('Potato___Late_blight'), user.id)
    repo.save(make_report('Tomato___Spider_mites Two-spotted_spider_mite'), user.id)

    stats = repo.stats(user.id)

    assert stats['total_scans'] == 4
    assert stats['healthy_count'] == 1
    assert stats['unhealthy_count'] == 3
    assert stats['pest_count'] == 1
    assert stats['by_plant'] == {'Tomato': 2, 'Potato': 2}
    assert stats['top_conditions'][0] == {'label': 'Potato___Late_blight', 'count': 2}
    assert stats['average_health'] == round((95 + 50 + 50 + 80) / 4, 1)


def test_stats_empty(repo, user):
    stats = repo.stats(user.id)
    assert stats['total_scans'] == 0
    assert stats['average_health'] is None


class RecordingSession:
    """Forwards to a real session and records query() calls."""

    def __init__(self, session):
        self.session = session
        self.queried = []

    def query(self, *entities):
        self.queried.append(entities)
        return self.session.query(*entities)

    def __getattr__(self, name):
        return getattr(self.session, name)


def test_reads_use_the_given_session(user):
    recording = RecordingSession(db.session)
    repo = ScanRepository(session=recording)
    repo.save(make_report('Potato___Late_blight', scan_id='scan-session-1'), user.id)

    assert repo.get(user.id, 'scan-session-1') is not None
    recording.queried.clear()

    stats = repo.stats(user.id)

    assert stats['total_scans'] == 1
    assert stats['by_plant'] == {'Potato': 1}
    assert len(recording.queried) == 6
