import io
import uuid
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest
from PIL import Image

from plantscan.app import create_app
from plantscan.extensions import db
from plantscan.knowledge import default_label_map
from plantscan.models import User
from plantscan.services.report import assemble_report

PASSWORD = 'Password123'


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_png(color=(34, 139, 34), size=(16, 16)):
    """Small solid-colour PNG."""
    buffer = io.BytesIO()
    Image.new('RGB', size, color).save(buffer, format='PNG')
    return buffer.getvalue()


def make_report(label, scan_id=None, **kwargs):
    return assemble_report(
        label,
        default_label_map(),
        np.full(10, 0.5),
        image_reference=kwargs.pop('image_reference', 'https://i.ibb.co/test/leaf.jpg'),
        scan_id=scan_id or uuid.uuid4().hex,
        **kwargs
    )


def register(client, email):
    response = client.post('/api/auth/register', json={
        'email': email,
        'password': PASSWORD,
        'first_name': 'Test'
    })
    assert response.status_code == 201, response.get_json()
    body = response.get_json()
    return {
        'id': body['user']['id'],
        'email': email,
        'headers': {'Authorization': f"Bearer {body['access_token']}"},
        'refresh_headers': {'Authorization': f"Bearer {body['refresh_token']}"}
    }


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def free_user(client):
    return register(client, 'free@example.com')


@pytest.fixture
def premium_user(client):
    account = register(client, 'premium@example.com')
    user = db.session.get(User, account['id'])
    user.subscription_tier = 'premium'
    user.subscription_status = 'active'
    user.subscription_expiry = datetime.now(timezone.utc) + timedelta(days=30)
    db.session.commit()
    return account
