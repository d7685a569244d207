from plantscan.knowledge.diseases import DISEASES
from plantscan.knowledge.pests import PESTS


def test_list_diseases(client):
    data = client.get('/api/knowledge/diseases').get_json()['data']
    assert data['total'] == len(DISEASES)
    assert set(data['diseases'][0]) == {'id', 'name', 'severity'}


def test_filter_diseases_by_severity(client):
    data = client.get('/api/knowledge/diseases?severity=critical').get_json()['data']
    assert {d['id'] for d in data['diseases']} == {'esca', 'yellow_leaf_curl_virus'}


def test_disease_detail_anonymous_is_summary(client):
    response = client.get('/api/knowledge/diseases/late_blight')
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['premium'] is False
    assert 'treatments' not in data


def test_disease_detail_premium_is_full(client, premium_user):
    data = client.get('/api/knowledge/diseases/late_blight',
                      headers=premium_user['headers']).get_json()['data']
    assert data['premium'] is True
    assert data['scientific_name'] == 'Phytophthora infestans'
    assert data['treatments']


def test_unknown_disease_404(client):
    response = client.get('/api/knowledge/diseases/mystery_rot')
    assert response.status_code == 404
    assert "mystery_rot" in response.get_json()['error']


def test_pests(client, premium_user):
    listing = client.get('/api/knowledge/pests').get_json()['data']
    assert listing['total'] == len(PESTS)

    detail = client.get('/api/knowledge/pests/aphids', headers=premium_user['headers']).get_json()['data']
    assert detail['type'] == 'insect'

    assert client.get('/api/knowledge/pests/locusts').status_code == 404


def test_plants(client):
    data = client.get('/api/knowledge/plants').get_json()['data']
    plants = {p['name']: p for p in data['plants']}

    assert data['total'] == 10
    assert 'Tomato___healthy' in plants['Tomato']['labels']
    assert 'spider_mites' in plants['Tomato']['pests']
    assert set(plants['Potato']['diseases']) == {'early_blight', 'late_blight'}
    assert plants['Potato']['scientific_name'] == 'Solanum tuberosum'
