import logging

from PIL import Image

from addressbook.avatars import generate_avatars, list_avatar_files, output_name, render_avatar
from addressbook.config_loader import AvatarsConfig

from conftest import RAW_A, RAW_B, corrupt_png, friendly


def _make_image(path, size=(300, 150), mode="RGB", color=(200, 30, 30)):
    Image.new(mode, size, color).save(path)
    return path


def _config(tmp_path, **overrides):
    values = dict(dir=tmp_path / "avatars", out_dir=tmp_path / "build" / "avatars")
    values.update(overrides)
    return AvatarsConfig(**values)


def test_avatar_produces_three_square_variants(tmp_path):
    config = _config(tmp_path)
    config.dir.mkdir()
    _make_image(config.dir / f"{RAW_A}.png")

    report = generate_avatars(config)

    expected = {
        output_name(RAW_A, 200, "webp"),
        output_name(friendly(RAW_A, True), 200, "webp"),
        output_name(friendly(RAW_A, False), 200, "webp"),
    }
    assert {path.name for path in report.outputs} == expected
    assert report.processed == [f"{RAW_A}.png"]
    for name in expected:
        with Image.open(config.out_dir / name) as produced:
            assert produced.size == (200, 200)
            assert produced.format == "WEBP"


def test_friendly_stem_produces_same_names_as_raw(tmp_path):
    config = _config(tmp_path)
    config.dir.mkdir()
    _make_image(config.dir / f"{friendly(RAW_B, False)}.jpg")

    report = generate_avatars(config)
    assert output_name(RAW_B, 200, "webp") in {path.name for path in report.outputs}


def test_bad_files_are_logged_and_skipped(tmp_path, caplog):
    config = _config(tmp_path)
    config.dir.mkdir()
    _make_image(config.dir / f"{RAW_A}.png")
    _make_image(config.dir / "not-an-address.png")
    (config.dir / f"{RAW_B}.png").write_bytes(b"not an image")

    with caplog.at_level(logging.WARNING, logger="addressbook.avatars"):
        report = generate_avatars(config)

    assert report.processed == [f"{RAW_A}.png"]
    assert sorted(report.failed) == sorted([f"{RAW_B}.png", "not-an-address.png"])
    assert report.total == 3
    assert "not-an-address.png" in caplog.text


def test_missing_directory_is_an_empty_pass(tmp_path):
    config = _config(tmp_path)
    report = generate_avatars(config)
    assert report.total == 0
    assert not config.out_dir.exists()


def test_list_avatar_files_applies_whitelist(tmp_path):
    directory = tmp_path / "avatars"
    directory.mkdir()
    for name in ("a.PNG", "b.jpeg", "c.txt", "d.svg"):
        (directory / name).write_bytes(b"")
    files = list_avatar_files(directory, [".png", ".jpeg"])
    assert [path.name for path in files] == ["a.PNG", "b.jpeg"]


def test_render_avatar_cover_fits_and_keeps_alpha():
    image = Image.new("RGBA", (400, 100), (0, 0, 0, 0))
    image.paste((255, 0, 0, 255), (175, 0, 225, 100))
    squared = render_avatar(image, 200, "webp")
    assert squared.size == (200, 200)
    assert squared.mode == "RGBA"
    # centered crop keeps the opaque middle band
    assert squared.getpixel((100, 100))[3] == 255
    assert squared.getpixel((0, 100))[3] == 0


def test_render_avatar_flattens_for_jpeg():
    image = Image.new("RGBA", (50, 80), (0, 0, 255, 128))
    assert render_avatar(image, 200, "jpeg").mode == "RGB"


def test_output_directory_creation_is_idempotent(tmp_path):
    config = _config(tmp_path)
    config.dir.mkdir()
    config.out_dir.mkdir(parents=True)
    _make_image(config.dir / f"{RAW_A}.png")
    assert len(generate_avatars(config).outputs) == 3
    assert len(generate_avatars(config).outputs) == 3


def _corrupt_png(path):
    return corrupt_png(_make_image(path, size=(64, 48)))


def test_corrupt_png_header_is_skipped(tmp_path):
    config = _config(tmp_path)
    config.dir.mkdir()
    _make_image(config.dir / f"{RAW_A}.png")
    _corrupt_png(config.dir / f"{RAW_B}.png")

    report = generate_avatars(config)

    assert report.processed == [f"{RAW_A}.png"]
    assert report.failed == [f"{RAW_B}.png"]
    assert len(report.outputs) == 3


def test_spellings_of_one_address_keep_last_sorted_file(tmp_path):
    config = _config(tmp_path, format="png")
    config.dir.mkdir()
    raw_name = f"{RAW_A}.png"
    friendly_name = f"{friendly(RAW_A, True)}.png"
    _make_image(config.dir / raw_name, color=(255, 0, 0))
    _make_image(config.dir / friendly_name, color=(0, 0, 255))
    winner, loser = sorted([raw_name, friendly_name])[::-1]

    for _ in range(3):
        report = generate_avatars(config)
        assert report.processed == [winner]
        assert report.superseded == [loser]
        assert len(report.outputs) == 3

    expected = (0, 0, 255) if winner == friendly_name else (255, 0, 0)
    with Image.open(config.out_dir / output_name(RAW_A, 200, "png")) as produced:
        assert produced.convert("RGB").getpixel((100, 100)) == expected
