from weekend.utilities.backup import BackupManager


def test_backup_missing_file(tmp_path):
    manager = BackupManager(tmp_path)
    assert manager.create_backup("plans.json") is False
    assert manager.list_backups() == []


def test_backup_keeps_newest(tmp_path):
    (tmp_path / "plans.json").write_text("[]", encoding="utf-8")
    manager = BackupManager(tmp_path, keep=2)
    for _ in range(3):
        assert manager.create_backup("plans.json")
    backups = manager.list_backups("plans.json")
    assert len(backups) == 2
    assert all(b["name"].startswith("plans_") for b in backups)
    assert backups[0]["name"] > backups[1]["name"]


def test_restore_backup(tmp_path):
    data = tmp_path / "plans.json"
    data.write_text('[{"id": "old"}]', encoding="utf-8")
    manager = BackupManager(tmp_path, tmp_path / "bk")
    manager.create_backup("plans.json")
    [backup] = manager.list_backups("plans.json")

    data.write_text("[]", encoding="utf-8")
    assert manager.restore_backup(backup["name"]) is True
    assert data.read_text(encoding="utf-8") == '[{"id": "old"}]'
    # the overwritten content was backed up before restoring
    assert len(manager.list_backups("plans.json")) == 2
    assert manager.restore_backup("plans_missing.json") is False


def test_original_name():
    assert BackupManager.original_name("plans_20261019-101500-000123.json") == "plans.json"
