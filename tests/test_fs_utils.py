import io
import os
import stat

import pytest

from gitchat.fs_utils import (
    copy_dir,
    copy_file,
    copy_stream,
    find_in_path,
    get_cwd,
    get_symlink_target,
    is_executable,
    safe_create_dir,
    set_cloexec,
)


def _make_executable(path, mode=0o755):
    path.write_text("#!/bin/sh\n")
    path.chmod(mode)
    return path


def test_copy_file_copies_bytes(tmp_path):
    data = b"hello world\n" * 1000
    src = tmp_path / "src.bin"
    src.write_bytes(data)
    dest = tmp_path / "dest.bin"

    written = copy_file(str(dest), str(src), 0o600)

    assert written == len(data)
    assert dest.read_bytes() == data
    assert stat.S_IMODE(dest.stat().st_mode) == 0o600


def test_copy_file_same_path_raises(tmp_path):
    src = tmp_path / "f"
    src.write_bytes(b"x")
    with pytest.raises(ValueError):
        copy_file(str(src), str(src), 0o644)


def test_copy_file_existing_destination_raises(tmp_path):
    src = tmp_path / "a"
    dest = tmp_path / "b"
    src.write_bytes(b"new")
    dest.write_bytes(b"old")
    with pytest.raises(FileExistsError):
        copy_file(str(dest), str(src), 0o644)
    assert dest.read_bytes() == b"old"


def test_copy_file_missing_source_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_file(str(tmp_path / "out"), str(tmp_path / "missing"), 0o644)
    assert not (tmp_path / "out").exists()


def test_copy_stream_round_trip():
    data = bytes(range(256)) * 50
    src = io.BytesIO(data)
    dest = io.BytesIO()
    assert copy_stream(dest, src) == len(data)
    assert dest.getvalue() == data


def test_copy_stream_same_stream_raises():
    stream = io.BytesIO(b"abc")
    with pytest.raises(ValueError):
        copy_stream(stream, stream)


def test_get_symlink_target(tmp_path):
    link = tmp_path / "link"
    os.symlink("some/target/path", link)
    assert get_symlink_target(str(link)) == "some/target/path"


def test_get_symlink_target_not_a_link(tmp_path):
    regular = tmp_path / "regular"
    regular.write_text("x")
    with pytest.raises(OSError):
        get_symlink_target(str(regular))


def test_get_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cwd = get_cwd()
    assert os.path.realpath(cwd) == os.path.realpath(str(tmp_path))


def test_safe_create_dir_creates_and_tolerates_existing(tmp_path):
    path = safe_create_dir(str(tmp_path), "sub", 0o755)
    assert path == f"{tmp_path}/sub"
    assert os.path.isdir(path)
    assert safe_create_dir(str(tmp_path), "sub", 0o755) == path
    assert os.path.isdir(path)


def test_safe_create_dir_without_subdirectory(tmp_path):
    target = tmp_path / "plain"
    assert safe_create_dir(str(target), None, 0o700) == str(target)
    assert target.is_dir()


def test_safe_create_dir_missing_parent_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        safe_create_dir(str(tmp_path / "no" / "such"), "dir", 0o755)


def test_is_executable(tmp_path):
    exe = _make_executable(tmp_path / "exe")
    plain = _make_executable(tmp_path / "plain", 0o644)
    assert is_executable(str(exe)) is True
    assert is_executable(str(plain)) is False
    assert is_executable(str(tmp_path)) is False
    assert is_executable(str(tmp_path / "missing")) is False


def test_find_in_path_searches_in_order(tmp_path, monkeypatch):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    _make_executable(second / "git-chat-ext")
    _make_executable(first / "git-chat-ext", 0o644)
    monkeypatch.setenv("PATH", f"{first}:{second}")

    assert find_in_path("git-chat-ext") == f"{second}/git-chat-ext"
    assert find_in_path("git-chat-missing") is None


def test_find_in_path_empty_entry_is_current_directory(tmp_path, monkeypatch):
    _make_executable(tmp_path / "tool")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PATH", f"{tmp_path / 'nothing'}:")
    assert find_in_path("tool") == "tool"


def test_find_in_path_empty_path(monkeypatch):
    monkeypatch.setenv("PATH", "")
    assert find_in_path("sh") is None
    monkeypatch.delenv("PATH")
    assert find_in_path("sh") is None


def test_set_cloexec():
    read_fd, write_fd = os.pipe()
    try:
        os.set_inheritable(read_fd, True)
        set_cloexec(read_fd)
        assert os.get_inheritable(read_fd) is False
    finally:
        os.close(read_fd)
        os.close(write_fd)


def test_set_cloexec_bad_descriptor():
    read_fd, write_fd = os.pipe()
    os.close(read_fd)
    os.close(write_fd)
    with pytest.raises(OSError):
        set_cloexec(read_fd)


def test_copy_dir_copies_tree(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "file.txt").write_bytes(b"contents")
    (src / "file.txt").chmod(0o640)
    _make_executable(src / "run.sh", 0o750)
    nested = src / "nested"
    nested.mkdir()
    (nested / "deep.txt").write_bytes(b"deep data")
    os.symlink("nested/deep.txt", src / "link")

    dest = tmp_path / "dest"
    copy_dir(str(src), str(dest))

    assert (dest / "file.txt").read_bytes() == b"contents"
    assert stat.S_IMODE((dest / "file.txt").stat().st_mode) == 0o640
    assert stat.S_IMODE((dest / "run.sh").stat().st_mode) == 0o750
    assert (dest / "nested" / "deep.txt").read_bytes() == b"deep data"
    assert os.path.islink(dest / "link")
    assert os.readlink(dest / "link") == "nested/deep.txt"
    assert sorted(os.listdir(dest)) == sorted(os.listdir(src))


def test_copy_dir_missing_source_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_dir(str(tmp_path / "missing"), str(tmp_path / "dest"))
    assert not (tmp_path / "dest").exists()


def test_copy_dir_conflicting_file_raises(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "a").write_bytes(b"new")
    dest = tmp_path / "dest"
    dest.mkdir()
    (dest / "a").write_bytes(b"old")
    with pytest.raises(FileExistsError):
        copy_dir(str(src), str(dest))
    assert (dest / "a").read_bytes() == b"old"