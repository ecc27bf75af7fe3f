import base64

import pytest

from review_proof.encoder import (
    SOFT_SIZE_LIMIT,
    exceeds_soft_limit,
    file_to_base64,
    strip_data_url_header,
    to_data_url,
)
from review_proof.errors import EncodeError


def test_encoding_round_trips_original_bytes(image) -> None:
    text = file_to_base64(image)
    assert base64.b64decode(text) == image.read_bytes()


def test_encoding_has_no_data_url_header(image) -> None:
    text = file_to_base64(image)
    assert not text.startswith("data:")
    assert "," not in text


def test_data_url_header_is_stripped() -> None:
    url = to_data_url(b"hello", "image/png")
    assert url.startswith("data:image/png;base64,")
    assert strip_data_url_header(url) == base64.b64encode(b"hello").decode()


def test_header_without_comma_is_a_read_failure() -> None:
    with pytest.raises(EncodeError):
        strip_data_url_header("not a data url")


def test_missing_file_raises_encode_error(tmp_path) -> None:
    with pytest.raises(EncodeError) as exc:
        file_to_base64(tmp_path / "nope.png")
    assert isinstance(exc.value.__cause__, OSError)


def test_directory_raises_encode_error(tmp_path) -> None:
    with pytest.raises(EncodeError):
        file_to_base64(tmp_path)


def test_soft_limit_is_only_advisory(tmp_path) -> None:
    big = tmp_path / "big.jpg"
    with big.open("wb") as fh:
        fh.truncate(SOFT_SIZE_LIMIT + 1)
    assert exceeds_soft_limit(big)
    assert len(file_to_base64(big)) > SOFT_SIZE_LIMIT
    assert not exceeds_soft_limit(tmp_path / "missing.jpg")
