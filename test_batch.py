import pytest
from PIL import Image

import frame_batch
from frame_batch import FrameFailure, FrameRecord, list_images, process_folder
from frame_errors import DirectoryNotFoundError, EmptyBatchError, InvalidInputError
from frame_packer import Thresholder


def make_image(path, color=(255, 255, 255), size=(16, 16)):
    Image.new("RGB", size, color).save(path)


def test_output_follows_filename_order(tmp_path):
    for name in ("b.png", "a.png", "c.png"):
        make_image(tmp_path / name)

    frames, failures = process_folder(tmp_path, 8, 8, verbose=False)

    assert [f.filename for f in frames] == ["a.png", "b.png", "c.png"]
    assert failures == []
    assert all(isinstance(f, FrameRecord) and len(f.data) == 8 for f in frames)


def test_sort_is_codepoint_order(tmp_path):
    for name in ("frame_10.png", "frame_2.png", "Frame_3.png"):
        make_image(tmp_path / name)
    assert list_images(tmp_path) == ["Frame_3.png", "frame_10.png", "frame_2.png"]


def test_partial_failure(tmp_path):
    make_image(tmp_path / "a.png")
    (tmp_path / "b.png").write_bytes(b"garbage")
    make_image(tmp_path / "c.png", color=(0, 0, 0))

    frames, failures = process_folder(tmp_path, 8, 8, verbose=False)

    assert [f.filename for f in frames] == ["a.png", "c.png"]
    assert frames[0].data == b"\xff" * 8
    assert frames[1].data == b"\x00" * 8
    assert len(failures) == 1
    assert isinstance(failures[0], FrameFailure)
    assert failures[0].filename == "b.png"
    assert failures[0].message


def test_non_images_are_ignored(tmp_path):
    make_image(tmp_path / "a.PNG")
    make_image(tmp_path / "b.JpG", color=(0, 0, 0))
    (tmp_path / "notes.txt").write_text("hello")
    (tmp_path / "frames.h").write_text("// old output")
    (tmp_path / "dir.png").mkdir()

    frames, failures = process_folder(tmp_path, 8, 8, verbose=False)

    assert [f.filename for f in frames] == ["a.PNG", "b.JpG"]
    assert failures == []


def test_empty_folder(tmp_path):
    (tmp_path / "readme.txt").write_text("no images here")
    with pytest.raises(EmptyBatchError):
        process_folder(tmp_path, 8, 8, verbose=False)


def test_all_files_fail(tmp_path):
    (tmp_path / "a.png").write_bytes(b"x")
    (tmp_path / "b.gif").write_bytes(b"y")
    with pytest.raises(EmptyBatchError):
        process_folder(tmp_path, 8, 8, verbose=False)


def test_missing_folder(tmp_path):
    with pytest.raises(DirectoryNotFoundError):
        process_folder(tmp_path / "missing", 8, 8, verbose=False)

    make_image(tmp_path / "file.png")
    with pytest.raises(DirectoryNotFoundError):
        process_folder(tmp_path / "file.png", 8, 8, verbose=False)


def test_invalid_size_is_fatal(tmp_path):
    make_image(tmp_path / "a.png")
    with pytest.raises(InvalidInputError):
        process_folder(tmp_path, 0, 8, verbose=False)


def test_thresholder_is_used(tmp_path):
    make_image(tmp_path / "gray.png", color=(100, 100, 100))

    frames, _ = process_folder(tmp_path, 8, 1, Thresholder(threshold=50), verbose=False)

    assert frames[0].data == b"\xff"


def test_progress_output(tmp_path, capsys):
    make_image(tmp_path / "a.png")
    (tmp_path / "b.png").write_bytes(b"garbage")

    process_folder(tmp_path, 8, 8)

    out = capsys.readouterr().out
    assert "[Batch] Found 2 images:" in out
    assert "[1/2] Processing a.png" in out
    assert "Error:" in out


def test_unreadable_file_is_recorded(tmp_path, monkeypatch):
    for name in ("a.png", "b.png", "c.png"):
        make_image(tmp_path / name)

    real_load = frame_batch.load_pixels

    def load(path, width, height):
        if path.endswith("b.png"):
            raise PermissionError(13, "Permission denied", path)
        return real_load(path, width, height)

    monkeypatch.setattr(frame_batch, "load_pixels", load)

    frames, failures = process_folder(tmp_path, 8, 8, verbose=False)

    assert [f.filename for f in frames] == ["a.png", "c.png"]
    assert [f.filename for f in failures] == ["b.png"]
    assert "Cannot read" in failures[0].message
    assert "Permission denied" in failures[0].message
