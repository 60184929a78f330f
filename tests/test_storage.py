import pytest

from ledboard.errors import ImageNotFoundError, InvalidFilenameError
from ledboard.infrastructure.storage import ImageStore, gallery


def test_save_and_read_round_trip(tmp_path):
    store = ImageStore(tmp_path / "shots", "screenshot", "/screenshots")

    path = store.save("board.png", b"data")

    assert path == tmp_path / "shots" / "board.png"
    assert store.exists("board.png")
    assert store.read("board.png") == b"data"


def test_read_missing_image(tmp_path):
    store = ImageStore(tmp_path, "processed", "/processed")

    with pytest.raises(ImageNotFoundError):
        store.read("nope.png")


@pytest.mark.parametrize("name", ["../escape.png", "a/b.png", "", "notes.txt", ".hidden.png"])
def test_unsafe_names_are_rejected(tmp_path, name):
    store = ImageStore(tmp_path, "processed", "/processed")

    with pytest.raises(InvalidFilenameError):
        store.save(name, b"x")


def test_list_images_filters_and_sorts(tmp_path):
    store = ImageStore(tmp_path, "processed", "/processed/")
    for name in ("b.png", "a.JPG", "c.webp"):
        store.save(name, b"x")
    (tmp_path / "readme.txt").write_text("skip me")

    assert store.list_images() == [
        {"name": "a.JPG", "url": "/processed/a.JPG", "type": "processed"},
        {"name": "b.png", "url": "/processed/b.png", "type": "processed"},
        {"name": "c.webp", "url": "/processed/c.webp", "type": "processed"},
    ]


def test_gallery_tolerates_missing_directories(tmp_path):
    shots = ImageStore(tmp_path / "missing", "screenshot", "/screenshots")
    processed = ImageStore(tmp_path / "processed", "processed", "/processed")
    processed.save("out.png", b"x")

    listing = gallery(shots, processed)

    assert listing["screenshots"] == []
    assert [entry["name"] for entry in listing["processed"]] == ["out.png"]
