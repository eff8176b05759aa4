import pytest

from zulucontrol.image import Image
from zulucontrol.image_iterator import (
    ImageIterator,
    is_valid_filename,
    load_image_by_filename,
)


@pytest.fixture
def image_dir(tmp_path):
    (tmp_path / "beta.iso").write_bytes(b"x" * 10)
    (tmp_path / "Alpha.iso").write_bytes(b"x" * 5)
    (tmp_path / "gamma.bin").write_bytes(b"x" * 20)
    (tmp_path / "readme.txt").write_text("notes")
    (tmp_path / "zuluide.ini").write_text("[UI]")
    (tmp_path / ".hidden").write_text("h")
    (tmp_path / "subdir").mkdir()
    return tmp_path


def walk_forward(iterator):
    names = []
    while iterator.move_next():
        names.append(iterator.get().filename)
    return names


@pytest.mark.parametrize(
    "name",
    [
        "ice5lp1k_top_bitmap.bin",
        "ICE5LP1K_TOP_BITMAP.BIN",
        ".hidden",
        "_underscore.iso",
        "zuluide.ini",
        "ZuluSomething.iso",
        "track.cue",
        "notes.TXT",
        "disk.iso.zip",
        "backup.tar.gz",
        "stuff.7z",
        "",
    ],
)
def test_invalid_filenames(name):
    assert is_valid_filename(name) is False


@pytest.mark.parametrize("name", ["game.iso", "Disk1.img", "9lives.bin", "noext", "file."])
def test_valid_filenames(name):
    assert is_valid_filename(name) is True


def test_reset_counts_all_entries(image_dir):
    iterator = ImageIterator(image_dir)
    iterator.reset()
    assert iterator.file_count == 7
    assert iterator.is_empty is False


def test_forward_iteration_is_case_insensitive_alphabetical(image_dir):
    iterator = ImageIterator(image_dir)
    iterator.reset()
    assert walk_forward(iterator) == ["Alpha.iso", "beta.iso", "gamma.bin"]


def test_iteration_without_explicit_reset(image_dir):
    iterator = ImageIterator(image_dir)
    assert walk_forward(iterator) == ["Alpha.iso", "beta.iso", "gamma.bin"]


def test_first_and_last_flags(image_dir):
    iterator = ImageIterator(image_dir)
    iterator.reset()
    assert iterator.move_next()
    assert iterator.is_first and not iterator.is_last
    assert iterator.move_next()
    assert not iterator.is_first and not iterator.is_last
    assert iterator.move_next()
    assert iterator.is_last and not iterator.is_first
    assert iterator.move_next() is False
    assert iterator.get().filename == "gamma.bin"


def test_get_reports_size(image_dir):
    iterator = ImageIterator(image_dir)
    iterator.reset()
    iterator.move_next()
    image = iterator.get()
    assert image.filename == "Alpha.iso"
    assert image.size_bytes == (image_dir / "Alpha.iso").stat().st_size


def test_move_previous_from_fresh_finds_last(image_dir):
    iterator = ImageIterator(image_dir)
    iterator.reset()
    assert iterator.move_previous()
    assert iterator.get().filename == "gamma.bin"
    assert iterator.move_previous()
    assert iterator.get().filename == "beta.iso"


def test_backward_walk_is_reverse_of_forward(image_dir):
    forward = walk_forward(ImageIterator(image_dir))
    iterator = ImageIterator(image_dir)
    backward = []
    while iterator.move_previous():
        backward.append(iterator.get().filename)
    assert backward == list(reversed(forward))


def test_move_first_and_last(image_dir):
    iterator = ImageIterator(image_dir)
    iterator.reset()
    assert iterator.move_last()
    assert iterator.get().filename == "gamma.bin"
    assert iterator.is_last and not iterator.is_first
    assert iterator.move_first()
    assert iterator.get().filename == "Alpha.iso"
    assert iterator.is_first and not iterator.is_last


def test_move_to_file(image_dir):
    iterator = ImageIterator(image_dir)
    iterator.reset()
    assert iterator.move_to_file("beta.iso")
    assert iterator.get().filename == "beta.iso"
    assert iterator.move_next()
    assert iterator.get().filename == "gamma.bin"
    assert iterator.move_to_file("missing.iso") is False


def test_empty_directory(tmp_path):
    iterator = ImageIterator(tmp_path)
    iterator.reset()
    assert iterator.is_empty is True
    assert iterator.move_next() is False
    assert iterator.move_first() is False
    assert iterator.move_last() is False


def test_missing_root(tmp_path):
    iterator = ImageIterator(tmp_path / "nope")
    iterator.reset()
    assert iterator.is_empty is True
    assert iterator.move_next() is False


def test_get_without_move_raises(image_dir):
    iterator = ImageIterator(image_dir)
    iterator.reset()
    with pytest.raises(LookupError):
        iterator.get()


def test_reset_restarts_iteration(image_dir):
    iterator = ImageIterator(image_dir)
    first_pass = walk_forward(iterator)
    iterator.reset()
    assert walk_forward(iterator) == first_pass


def test_context_manager_closes(image_dir):
    with ImageIterator(image_dir) as iterator:
        iterator.reset()
        assert iterator.move_next()
    # The folder is closed, so the next move reopens it from the start.
    assert iterator.move_next()
    assert iterator.get().filename == "Alpha.iso"


def test_load_image_by_filename_found(image_dir):
    iterator = ImageIterator(image_dir)
    iterator.reset()
    image = load_image_by_filename("gamma.bin", iterator)
    assert isinstance(image, Image)
    assert image.filename == "gamma.bin"
    assert image.size_bytes == (image_dir / "gamma.bin").stat().st_size


def test_load_image_by_filename_not_found(image_dir):
    iterator = ImageIterator(image_dir)
    iterator.reset()
    assert load_image_by_filename("readme.txt", iterator) is None