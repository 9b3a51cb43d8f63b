"""
Backup utility for Weekend Planner data files.
Creates timestamped copies of the saved-plans file and restores them.
"""
import shutil
from datetime import datetime
from pathlib import Path
import logging

from weekend.utilities.config import BACKUP_KEEP

logger = logging.getLogger(__name__)

# sortable, unique within one process: 20261019-101500-000123
TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S-%f"


class BackupManager:
    """Manages backups of data files."""

    def __init__(self, data_dir: Path, backup_dir: Path = None, keep: int = BACKUP_KEEP):
        self.data_dir = Path(data_dir)
        self.backup_dir = Path(backup_dir) if backup_dir else (self.data_dir / 'backups')
        self.keep = keep
        self.backup_dir.mkdir(parents=True, exist_ok=True)

    def create_backup(self, filename: str = 'plans.json') -> bool:
        """Create a timestamped backup of a data file."""
        source = self.data_dir / filename
        if not source.exists():
            logger.warning(f"File not found for backup: {filename}")
            return False
        try:
            timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
            backup_name = f"{source.stem}_{timestamp}{source.suffix}"
            shutil.copy2(source, self.backup_dir / backup_name)
            logger.info(f"Backup created: {backup_name}")
        except OSError as e:
            logger.error(f"Backup failed for {filename}: {e}")
            return False

        self._cleanup_old_backups(source.name)
        return True

    def _backups_for(self, filename: str):
        pattern = f"{Path(filename).stem}_*{Path(filename).suffix}"
        return sorted(self.backup_dir.glob(pattern), key=lambda p: p.name)

    def _cleanup_old_backups(self, filename: str):
        """Remove old backups, keeping only the most recent ones."""
        backups = self._backups_for(filename)
        for backup in backups[:-self.keep] if self.keep > 0 else backups:
            try:
                backup.unlink()
                logger.info(f"Removed old backup: {backup.name}")
            except OSError as e:
                logger.error(f"Failed to remove old backup {backup.name}: {e}")

    @staticmethod
    def original_name(backup_filename: str) -> str:
        """plans_20261019-101500-000123.json -> plans.json"""
        path = Path(backup_filename)
        return path.stem.rsplit('_', 1)[0] + path.suffix

    def restore_backup(self, backup_filename: str) -> bool:
        """Restore a specific backup file; the file it replaces is backed up first."""
        backup_path = self.backup_dir / backup_filename
        if not backup_path.exists():
            logger.error(f"Backup not found: {backup_filename}")
            return False

        original_name = self.original_name(backup_filename)
        destination = self.data_dir / original_name
        if destination.exists():
            self.create_backup(destination.name)

        try:
            shutil.copy2(backup_path, destination)
        except OSError as e:
            logger.error(f"Restore failed for {backup_filename}: {e}")
            return False
        logger.info(f"Restored backup: {backup_filename} -> {original_name}")
        return True

    def list_backups(self, filename: str = None) -> list:
        """List all backups (newest first) or backups for a specific file."""
        if filename:
            backups = self._backups_for(filename)
        else:
            backups = sorted(self.backup_dir.glob("*"), key=lambda p: p.name)

        return [
            {
                'name': b.name,
                'size': b.stat().st_size,
                'created': datetime.fromtimestamp(b.stat().st_mtime).strftime('%Y-%m-%d %H:%M:%S')
            }
            for b in reversed(backups)
        ]


def auto_backup() -> bool:
    """Back up the saved-plans file in the configured data directory."""
    from weekend.infra.paths import BACKUP_DIR, DATA_DIR, PLANS_FILE
    manager = BackupManager(DATA_DIR, BACKUP_DIR)
    return manager.create_backup(PLANS_FILE.name)


if __name__ == "__main__":
    import argparse
    from weekend.infra.paths import BACKUP_DIR, DATA_DIR, PLANS_FILE

    parser = argparse.ArgumentParser(description='Back up or restore saved weekend plans')
    parser.add_argument('action', choices=['create', 'list', 'restore'])
    parser.add_argument('--name', help='Backup file name to restore')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    manager = BackupManager(DATA_DIR, BACKUP_DIR)

    if args.action == 'create':
        print("✓ Backup created" if manager.create_backup(PLANS_FILE.name) else "✗ Nothing to back up")
    elif args.action == 'restore':
        if not args.name:
            print("Error: --name is required for restore")
            raise SystemExit(1)
        print("✓ Restored" if manager.restore_backup(args.name) else "✗ Restore failed")
    else:
        print("\nAvailable backups:")
        for backup in manager.list_backups(PLANS_FILE.name):
            print(f"  - {backup['name']} ({backup['size']} bytes) - {backup['created']}")
