import io
import os

import pytest
from PIL import Image

from chanworks.thumbnail import (
    main,
    make_thumbnails,
    thumbnail,
    thumbnail_file,
    thumbnail_file_to,
    thumbnail_stream,
    total_thumbnail_size,
)

RED = (200, 10, 10)
BLUE = (10, 10, 200)


def _save(path, size=(256, 128), color=RED):
    Image.new("RGB", size, color).save(path, format="PNG")
    return str(path)


@pytest.mark.parametrize(
    "size, expected",
    [((256, 128), (128, 64)), ((100, 200), (64, 128)), ((50, 50), (128, 128))],
)
def test_thumbnail_size_keeps_aspect(size, expected):
    assert thumbnail(Image.new("RGB", size, RED)).size == expected


def test_thumbnail_solid_colour():
    thumb = thumbnail(Image.new("RGB", (300, 150), RED))
    assert set(thumb.getdata()) == {RED + (255,)}


def test_thumbnail_samples_nearest_pixels():
    src = Image.new("RGB", (256, 128), RED)
    src.paste(BLUE, (128, 0, 256, 128))
    thumb = thumbnail(src)
    assert thumb.getpixel((0, 10)) == RED + (255,)
    assert thumb.getpixel((127, 10)) == BLUE + (255,)


def test_thumbnail_stream_writes_jpeg(tmp_path):
    path = _save(tmp_path / "pic.png")
    out = io.BytesIO()
    with open(path, "rb") as src:
        thumbnail_stream(out, src)
    out.seek(0)
    with Image.open(out) as image:
        assert image.format == "JPEG"
        assert image.size == (128, 64)


def test_thumbnail_stream_rejects_non_image():
    with pytest.raises(OSError):
        thumbnail_stream(io.BytesIO(), io.BytesIO(b"not an image"))


def test_thumbnail_file_names_output(tmp_path):
    path = _save(tmp_path / "pic.png")
    out = thumbnail_file(path)
    assert out == str(tmp_path / "pic.thumb.png")
    with Image.open(out) as image:
        assert image.format == "JPEG"


def test_thumbnail_file_without_extension(tmp_path):
    path = _save(tmp_path / "pic")
    assert thumbnail_file(path) == str(tmp_path / "pic.thumb")
    assert os.path.exists(tmp_path / "pic.thumb")


def test_thumbnail_file_to_bad_image(tmp_path):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"garbage")
    with pytest.raises(ValueError, match="scaling"):
        thumbnail_file_to(str(tmp_path / "out.png"), str(bad))


def test_thumbnail_file_missing_input(tmp_path):
    with pytest.raises(FileNotFoundError):
        thumbnail_file(str(tmp_path / "missing.png"))
    assert not os.path.exists(tmp_path / "missing.thumb.png")


def test_make_thumbnails_returns_names(tmp_path):
    paths = [_save(tmp_path / f"p{i}.png") for i in range(3)]
    assert make_thumbnails(paths) == [str(tmp_path / f"p{i}.thumb.png") for i in range(3)]


def test_make_thumbnails_raises_first_error(tmp_path):
    good = _save(tmp_path / "good.png")
    with pytest.raises(FileNotFoundError):
        make_thumbnails([good, str(tmp_path / "missing.png")])


def test_total_thumbnail_size_skips_failures(tmp_path):
    good = _save(tmp_path / "good.png")
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"garbage")
    total = total_thumbnail_size([good, str(bad)])
    assert total == os.path.getsize(tmp_path / "good.thumb.png")
    assert total > 0


def test_main_prints_thumbnail_names(tmp_path, capsys):
    path = _save(tmp_path / "pic.png")
    assert main([path]) == 0
    assert capsys.readouterr().out.strip() == str(tmp_path / "pic.thumb.png")


def test_main_fails_on_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.png")]) == 1