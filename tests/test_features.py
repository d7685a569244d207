import numpy as np
import pytest

from plantscan.exceptions import InvalidImageError
from plantscan.services.features import (
    rolling_hash,
    image_fingerprint,
    extract_features,
    load_rgb_image
)

from conftest import make_png


def test_rolling_hash_known_values():
    assert rolling_hash('') == 0
    assert rolling_hash('a') == 97
    assert rolling_hash('ab') == 97 * 31 + 98
    assert rolling_hash('hello') == 99162322


def test_rolling_hash_wraps_to_signed_32_bits():
    h = rolling_hash('https://i.ibb.co/abcdef/a-very-long-leaf-photo-name.jpg' * 4)
    assert -2 ** 31 <= h < 2 ** 31


def test_extract_features_shape_and_range():
    features = extract_features('file:///tmp/leaf.jpg')
    assert features.shape == (10,)
    assert features.dtype == np.float64
    assert np.all(features >= 0.0)
    assert np.all(features < 1.0)


def test_extract_features_from_empty_reference():
    features = extract_features('', length=3)
    np.testing.assert_allclose(features, [0.0, 0.31, 0.62])


def test_extract_features_is_deterministic():
    a = extract_features('https://example.com/leaf.png')
    b = extract_features('https://example.com/leaf.png')
    np.testing.assert_array_equal(a, b)


def test_different_references_give_varied_features():
    vectors = {
        tuple(extract_features(f'https://example.com/leaf-{i}.png'))
        for i in range(50)
    }
    assert len(vectors) > 20


def test_custom_length():
    assert extract_features('x', length=4).shape == (4,)


def test_image_bytes_take_precedence_over_reference():
    image = make_png((200, 30, 30))
    a = extract_features('https://example.com/one.png', image_bytes=image)
    b = extract_features('https://example.com/two.png', image_bytes=image)
    np.testing.assert_array_equal(a, b)


def test_fingerprint_ignores_encoding_but_not_pixels():
    png = make_png((10, 20, 30))
    assert image_fingerprint(png) == image_fingerprint(make_png((10, 20, 30)))
    assert image_fingerprint(png) != image_fingerprint(make_png((30, 20, 10)))
    assert image_fingerprint(png) != image_fingerprint(make_png((10, 20, 30), size=(8, 32)))


def test_invalid_image_bytes_raise():
    with pytest.raises(InvalidImageError):
        load_rgb_image(b'definitely not an image')
    with pytest.raises(InvalidImageError):
        extract_features('ref', image_bytes=b'\x89PNG broken')


def test_empty_bytes_fall_back_to_reference():
    np.testing.assert_array_equal(
        extract_features('ref', image_bytes=b''),
        extract_features('ref')
    )
