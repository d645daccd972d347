from __future__ import annotations

from datetime import datetime

import pytest

from hypr_keys.errors import BackupFailure
from hypr_keys.store.backups import BackupStore, backup_name, parse_backup_name


FIXED = datetime(2024, 3, 9, 14, 5, 7, 123456)


def _store(tmp_path, clock=lambda: FIXED) -> BackupStore:
    backup_dir = tmp_path / "backups"
    backup_dir.mkdir(exist_ok=True)
    return BackupStore(tmp_path / "hyprland.conf", backup_dir, clock=clock)


def test_backup_name_format() -> None:
    assert backup_name("hyprland.conf", FIXED) == "hyprland.conf.2024-03-09_140507"
    assert parse_backup_name("hyprland.conf.2024-03-09_140507", "hyprland.conf") == FIXED.replace(
        microsecond=0
    )


@pytest.mark.parametrize(
    "name",
    [
        "other.conf.2024-03-09_140507",
        "hyprland.conf",
        "hyprland.conf.notes",
        "hyprland.conf.2024-13-40_000000",
        "hyprland.conf.2024-03-09_140507.tmp",
    ],
)
def test_parse_backup_name_rejects_foreign_names(name: str) -> None:
    assert parse_backup_name(name, "hyprland.conf") is None


def test_create_writes_exact_content(tmp_path) -> None:
    store = _store(tmp_path)
    content = 'bind = SUPER, Q, exec, notify-send "hi"'

    path = store.create(content)

    assert path.name == "hyprland.conf.2024-03-09_140507"
    assert path.read_bytes() == content.encode("utf-8")


def test_same_second_backups_do_not_overwrite(tmp_path) -> None:
    store = _store(tmp_path)

    first = store.create("one")
    second = store.create("two")
    third = store.create("three")

    assert first.name == "hyprland.conf.2024-03-09_140507"
    assert second.name == "hyprland.conf.2024-03-09_140508"
    assert third.name == "hyprland.conf.2024-03-09_140509"
    assert first.read_text() == "one"


def test_create_without_backup_dir_fails(tmp_path) -> None:
    store = BackupStore(tmp_path / "hyprland.conf", tmp_path / "missing", clock=lambda: FIXED)
    with pytest.raises(BackupFailure):
        store.create("x")


def test_list_newest_first_and_skips_foreign_entries(tmp_path) -> None:
    stamps = iter(
        [
            datetime(2024, 1, 2, 0, 0, 0),
            datetime(2024, 1, 1, 0, 0, 0),
            datetime(2024, 1, 3, 0, 0, 0),
        ]
    )
    store = _store(tmp_path, clock=lambda: next(stamps))
    for content in ("b", "a", "c"):
        store.create(content)

    (store.backup_dir / "other.conf.2024-01-04_000000").write_text("x")
    (store.backup_dir / "hyprland.conf.README").write_text("x")
    (store.backup_dir / "hyprland.conf.2024-01-05_000000").mkdir()

    backups = store.list_backups()

    assert [b.path.read_text() for b in backups] == ["c", "b", "a"]
    assert backups[0].timestamp == datetime(2024, 1, 3, 0, 0, 0)


def test_list_missing_directory_is_empty(tmp_path) -> None:
    store = BackupStore(tmp_path / "hyprland.conf", tmp_path / "missing")
    assert store.list_backups() == []


def test_cleanup_keeps_newest(tmp_path) -> None:
    store = _store(tmp_path)
    for index in range(5):
        store.create(str(index))

    assert store.cleanup(2) == 3
    assert [b.path.read_text() for b in store.list_backups()] == ["4", "3"]
    assert store.cleanup(2) == 0
    assert store.cleanup(0) == 2
    assert store.list_backups() == []


def test_cleanup_rejects_negative_keep(tmp_path) -> None:
    with pytest.raises(ValueError):
        _store(tmp_path).cleanup(-1)
