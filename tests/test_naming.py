"""Tests for collision-free naming."""

from devtoolbox.infrastructure.storage.naming import allocate, allocate_copy_name, split_name


def test_free_name_is_returned_unchanged(tmp_path):
    assert allocate(tmp_path, "x.txt") == "x.txt"


def test_first_free_numeric_suffix_wins(tmp_path):
    (tmp_path / "x.txt").write_text("")
    (tmp_path / "x_1.txt").write_text("")
    assert allocate(tmp_path, "x.txt") == "x_2.txt"


def test_gaps_are_filled_in_increasing_order(tmp_path):
    (tmp_path / "x.txt").write_text("")
    (tmp_path / "x_2.txt").write_text("")
    assert allocate(tmp_path, "x.txt") == "x_1.txt"


def test_folders_have_no_extension(tmp_path):
    (tmp_path / "release.v1").mkdir()
    assert allocate(tmp_path, "release.v1", is_folder=True) == "release.v1_1"


def test_existing_folder_blocks_file_name(tmp_path):
    (tmp_path / "data").mkdir()
    assert allocate(tmp_path, "data") == "data_1"


def test_copy_scheme_uses_copy_infix(tmp_path):
    (tmp_path / "note.txt").write_text("")
    assert allocate_copy_name(tmp_path, "note.txt") == "note_copy_1.txt"
    (tmp_path / "note_copy_1.txt").write_text("")
    assert allocate_copy_name(tmp_path, "note.txt") == "note_copy_2.txt"


def test_split_name_uses_last_dot():
    assert split_name("archive.tar.gz") == ("archive.tar", ".gz")
    assert split_name("README") == ("README", "")
    assert split_name(".env") == ("", ".env")
    assert split_name("a.b", is_folder=True) == ("a.b", "")
