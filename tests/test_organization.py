import shutil
import pytest
from pathlib import Path
from datetime import datetime
from classfy.models import Category, PlacementStatus
from classfy.organization.placer import FilePlacer
from classfy.organization.registry import DuplicateRegistry
from classfy.organization.rules import build_name, classify
from classfy.scanning.hasher import FileHasher

DT = datetime(2020, 1, 2, 3, 4, 5)


@pytest.mark.parametrize(
    "ext,expected",
    [
        ("jpg", Category.IMAGES),
        ("JPG", Category.IMAGES),
        ("JpG", Category.IMAGES),
        (".png", Category.IMAGES),
        ("nef", Category.IMAGES),
        ("pdf", Category.DOCUMENTS),
        ("numbers", Category.DOCUMENTS),
        ("FLAC", Category.MUSIC),
        ("3gp", Category.VIDEOS),
        ("7z", Category.ARCHIVES),
        ("py", Category.OTHERS),
        ("yaml", Category.OTHERS),
        ("xyz", Category.OTHERS),
        ("", Category.OTHERS),
    ],
)
def test_classify(ext, expected):
    assert classify(ext) is expected

def test_music_lands_in_musics_folder():
    assert Category.MUSIC.folder == "musics"
    assert Category.IMAGES.folder == "images"

def test_build_name():
    fp = "abcdef0123456789abcdef0123456789abcdef01"
    assert build_name(DT, fp, "JPG") == "20200102-030405-abcd.jpg"
    assert build_name(DT, fp, "jpg", counter=3) == "20200102-030405-abcd_3.jpg"
    assert build_name(DT, fp, "") == "20200102-030405-abcd"

def test_registry():
    reg = DuplicateRegistry()
    assert not reg.seen("h1")

    reg.record("h1")
    reg.record("h1")
    assert reg.seen("h1")
    assert len(reg) == 1

    reg.forget("h1")
    assert not reg.seen("h1")


def test_placer_moves_file(src, dest, fixed_time):
    f = src / "Notes.TXT"
    f.write_bytes(b"hello")

    placer = FilePlacer(dest, FileHasher(), DuplicateRegistry())
    result = placer.place(f)

    expected = dest / "documents" / "20200102-030405-aaf4.txt"
    assert result.status is PlacementStatus.PLACED
    assert result.category is Category.DOCUMENTS
    assert result.destination == expected
    assert expected.read_bytes() == b"hello"
    assert not f.exists()

def test_placer_skips_registry_duplicate(src, dest, fixed_time):
    a = src / "a.txt"
    b = src / "b.txt"
    a.write_bytes(b"hello")
    b.write_bytes(b"hello")

    placer = FilePlacer(dest, FileHasher(), DuplicateRegistry())
    first = placer.place(a)
    second = placer.place(b)

    assert first.status is PlacementStatus.PLACED
    assert second.status is PlacementStatus.DUPLICATE
    # Duplicates are left where they are
    assert b.exists()
    assert len(list((dest / "documents").iterdir())) == 1

def test_placer_name_clash_gets_counter(src, dest, fixed_time, fake_hasher):
    x = src / "x.png"
    y = src / "y.PNG"
    x.write_bytes(b"x content")
    y.write_bytes(b"y content")
    hasher = fake_hasher({
        b"x content": "abcd" + "1" * 36,
        b"y content": "abcd" + "2" * 36,
    })

    placer = FilePlacer(dest, hasher, DuplicateRegistry())
    rx = placer.place(x)
    ry = placer.place(y)

    assert rx.destination == dest / "images" / "20200102-030405-abcd.png"
    assert ry.destination == dest / "images" / "20200102-030405-abcd_1.png"
    assert rx.destination.read_bytes() == b"x content"
    assert ry.destination.read_bytes() == b"y content"

def test_placer_keeps_preexisting_different_file(src, dest, fixed_time):
    existing = dest / "documents" / "20200102-030405-aaf4.txt"
    existing.parent.mkdir(parents=True)
    existing.write_bytes(b"something else")
    f = src / "a.txt"
    f.write_bytes(b"hello")

    result = FilePlacer(dest, FileHasher(), DuplicateRegistry()).place(f)

    assert result.status is PlacementStatus.PLACED
    assert result.destination == dest / "documents" / "20200102-030405-aaf4_1.txt"
    assert existing.read_bytes() == b"something else"

def test_placer_detects_duplicate_already_at_destination(src, dest, fixed_time):
    existing = dest / "documents" / "20200102-030405-aaf4.txt"
    existing.parent.mkdir(parents=True)
    existing.write_bytes(b"hello")
    f = src / "a.txt"
    f.write_bytes(b"hello")

    registry = DuplicateRegistry()
    result = FilePlacer(dest, FileHasher(), registry).place(f)

    assert result.status is PlacementStatus.DUPLICATE
    assert result.destination == existing
    assert f.exists()
    assert registry.seen("aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d")
    assert sorted(p.name for p in existing.parent.iterdir()) == [existing.name]

def test_placer_directory_in_the_way_counts_as_clash(src, dest, fixed_time):
    (dest / "documents" / "20200102-030405-aaf4.txt").mkdir(parents=True)
    f = src / "a.txt"
    f.write_bytes(b"hello")

    result = FilePlacer(dest, FileHasher(), DuplicateRegistry()).place(f)

    assert result.destination == dest / "documents" / "20200102-030405-aaf4_1.txt"

def test_placer_gives_up_after_max_attempts(src, dest, fixed_time, fake_hasher):
    folder = dest / "documents"
    folder.mkdir(parents=True)
    fp = "aaf4" + "0" * 36
    for name in ("20200102-030405-aaf4.txt", "20200102-030405-aaf4_1.txt", "20200102-030405-aaf4_2.txt"):
        (folder / name).write_bytes(b"other")
    f = src / "a.txt"
    f.write_bytes(b"hello")
    hasher = fake_hasher({b"hello": fp, b"other": "ffff" + "0" * 36})

    registry = DuplicateRegistry()
    result = FilePlacer(dest, hasher, registry, max_attempts=2).place(f)

    assert result.status is PlacementStatus.ERROR
    assert "No free name" in result.notes
    assert f.exists()
    assert not registry.seen(fp)

def test_placer_reports_unreadable_file(src, dest):
    result = FilePlacer(dest, FileHasher(), DuplicateRegistry()).place(src / "vanished.txt")

    assert result.status is PlacementStatus.ERROR
    assert result.record is None

def test_placer_releases_fingerprint_when_move_fails(src, dest, fixed_time, monkeypatch):
    f = src / "a.txt"
    f.write_bytes(b"hello")

    def broken_move(s, d):
        raise PermissionError("denied")
    monkeypatch.setattr(shutil, "move", broken_move)

    registry = DuplicateRegistry()
    result = FilePlacer(dest, FileHasher(), registry).place(f)

    assert result.status is PlacementStatus.ERROR
    assert "denied" in result.notes
    assert f.exists()
    assert not registry.seen("aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d")

def test_placer_unsearchable_category_folder_skips_only_that_file(src, dest, fixed_time, monkeypatch):
    a = src / "a.txt"
    b = src / "b.png"
    a.write_bytes(b"hello")
    b.write_bytes(b"png bytes")
    locked = dest / "documents"
    real_is_symlink = Path.is_symlink

    def is_symlink(self):
        if self.parent == locked:
            raise PermissionError(13, "Permission denied", str(self))
        return real_is_symlink(self)
    monkeypatch.setattr(Path, "is_symlink", is_symlink)

    registry = DuplicateRegistry()
    placer = FilePlacer(dest, FileHasher(), registry)
    ra = placer.place(a)
    rb = placer.place(b)

    assert ra.status is PlacementStatus.ERROR
    assert "Cannot inspect" in ra.notes
    assert a.exists()
    assert not registry.seen("aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d")
    assert rb.status is PlacementStatus.PLACED
    assert rb.destination.read_bytes() == b"png bytes"

def test_placer_dry_run_claims_names(src, dest, fixed_time, fake_hasher):
    x = src / "x.png"
    y = src / "y.png"
    x.write_bytes(b"x content")
    y.write_bytes(b"y content")
    hasher = fake_hasher({
        b"x content": "abcd" + "1" * 36,
        b"y content": "abcd" + "2" * 36,
    })

    placer = FilePlacer(dest, hasher, DuplicateRegistry(), dry_run=True)
    rx = placer.place(x)
    ry = placer.place(y)

    assert rx.destination.name == "20200102-030405-abcd.png"
    assert ry.destination.name == "20200102-030405-abcd_1.png"
    assert x.exists() and y.exists()
    assert not dest.exists()
