import base64
import io
from unittest import mock

import pytest
import requests
from PIL import Image

from plantscan.exceptions import ImageUploadError
from plantscan.services.image_host import ImgBBClient, encode_for_upload, DEFAULT_API_URL

from conftest import make_png


def _response(status=200, payload=None, json_error=False):
    response = mock.Mock()
    response.status_code = status
    response.ok = 200 <= status < 300
    if json_error:
        response.json.side_effect = ValueError('no json')
    else:
        response.json.return_value = payload
    return response


def _client(response=None, side_effect=None):
    session = mock.Mock()
    session.post.return_value = response
    session.post.side_effect = side_effect
    return ImgBBClient('test-key', session=session, timeout=5), session


def test_upload_returns_url_and_posts_form():
    client, session = _client(_response(payload={
        'success': True,
        'data': {'url': 'https://i.ibb.co/abc/leaf.jpg'}
    }))

    url = client.upload('data:image/jpeg;base64,QUJD', album_id='album1')

    assert url == 'https://i.ibb.co/abc/leaf.jpg'
    session.post.assert_called_once_with(
        DEFAULT_API_URL,
        data={'key': 'test-key', 'image': 'QUJD', 'album': 'album1'},
        timeout=5
    )


def test_upload_without_album():
    client, session = _client(_response(payload={'success': True, 'data': {'url': 'u'}}))
    client.upload('QUJD')
    assert 'album' not in session.post.call_args.kwargs['data']


@pytest.mark.parametrize('response', [
    _response(status=400, payload={'success': False}),
    _response(status=200, payload={'success': False}),
    _response(status=200, payload={'success': True, 'data': {}}),
    _response(status=200, json_error=True)
])
def test_upload_failures_raise(response):
    client, _ = _client(response)
    with pytest.raises(ImageUploadError):
        client.upload('QUJD')


def test_network_error_raises_without_retry():
    client, session = _client(side_effect=requests.exceptions.ConnectionError('down'))
    with pytest.raises(ImageUploadError):
        client.upload('QUJD')
    assert session.post.call_count == 1


def test_missing_key_raises():
    with pytest.raises(ImageUploadError):
        ImgBBClient('', session=mock.Mock()).upload('QUJD')


def test_from_config():
    assert ImgBBClient.from_config({'IMGBB_API_KEY': ''}) is None

    client = ImgBBClient.from_config({
        'IMGBB_API_KEY': 'k',
        'IMGBB_API_URL': 'https://upload.example.com',
        'IMGBB_TIMEOUT': 12
    })
    assert client.api_key == 'k'
    assert client.api_url == 'https://upload.example.com'
    assert client.timeout == 12


def test_encode_for_upload_shrinks_large_images():
    encoded = encode_for_upload(make_png(size=(3200, 800)))
    image = Image.open(io.BytesIO(base64.b64decode(encoded)))
    assert image.format == 'JPEG'
    assert image.size == (1600, 400)
