from __future__ import annotations

import pytest

from thrive_admin.exceptions import ValidationError
from thrive_admin.image_utils import (
    MAX_IMAGE_BYTES,
    ImageFile,
    build_object_path,
    object_path_from_url,
    safe_image_url,
    validate_image,
)


def test_image_from_path_guesses_content_type(tmp_path) -> None:
    image_path = tmp_path / "logo.PNG"
    image_path.write_bytes(b"\x89PNG data")

    image = ImageFile.from_path(image_path)

    assert image.filename == "logo.PNG"
    assert image.content_type == "image/png"
    assert image.extension == "png"
    assert image.size == 9


@pytest.mark.parametrize(
    ("image", "reason"),
    [
        (ImageFile("doc.pdf", b"%PDF", "application/pdf"), "Invalid file type"),
        (ImageFile("big.jpg", b"x" * (MAX_IMAGE_BYTES + 1), "image/jpeg"), "Maximum size is 5MB"),
        (ImageFile("empty.gif", b"", "image/gif"), "File is empty"),
    ],
)
def test_validate_image_rejects(image: ImageFile, reason: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_image(image)

    assert excinfo.value.issues[0].field == "image"
    assert reason in excinfo.value.issues[0].reason


def test_validate_image_accepts_webp_at_limit() -> None:
    validate_image(ImageFile("hero.webp", b"x" * MAX_IMAGE_BYTES, "image/webp"))


def test_build_object_path_is_timestamped() -> None:
    image = ImageFile("hero.jpeg", b"x", "image/jpeg")

    assert build_object_path("beneficiaries/", image, now_ms=1700000000000, token="ab12") == (
        "beneficiaries/1700000000000-ab12.jpeg"
    )
    assert build_object_path("", image, now_ms=1, token="z") == "1-z.jpeg"


def test_build_object_path_falls_back_to_content_type_extension() -> None:
    image = ImageFile("upload", b"x", "image/png")

    assert build_object_path("logos", image, now_ms=5, token="t").endswith(".png")


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        (
            "https://storage.example.com/storage/v1/object/public/beneficiary-images/logos/1-a.png",
            "beneficiary-images/logos/1-a.png",
        ),
        ("https://storage.example.com/storage/v1/object/vendor-logos/2-b.png", "vendor-logos/2-b.png"),
        ("/beneficiary-images/3-c.png", "beneficiary-images/3-c.png"),
    ],
)
def test_object_path_from_url(url: str, expected: str) -> None:
    assert object_path_from_url(url) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://cdn.example.com/a.png", "https://cdn.example.com/a.png"),
        ("javascript:alert(1)", None),
        ("/relative.png", None),
        ("", None),
        (None, None),
    ],
)
def test_safe_image_url(value, expected) -> None:
    assert safe_image_url(value) == expected
