"""Application tests for server backups and restores."""

import pytest


def _messages(engine):
    return [entry.message for entry in engine.notifications]


class TestCreateBackup:
    async def test_success_stamps_settings_and_notifies(self, engine):
        assert engine.snapshot().backup_settings.last_backup_at is None

        result = await engine.create_backup()

        assert result.file.startswith("backup-")
        assert engine.snapshot().backup_settings.last_backup_at is not None
        assert _messages(engine)[0] == result.message

    async def test_failure(self, engine, gateway):
        gateway.configure(should_succeed=False, methods=["create_backup"])

        assert await engine.create_backup() is None
        assert engine.snapshot().backup_settings.last_backup_at is None
        assert _messages(engine)[0] == "Error: Could not create backup."


class TestBackupSettings:
    def test_update(self, engine):
        assert engine.update_backup_settings(enabled=True, frequency="weekly")

        settings = engine.snapshot().backup_settings
        assert settings.enabled is True
        assert settings.frequency == "weekly"

    def test_unknown_frequency_rejected(self, engine):
        assert not engine.update_backup_settings(frequency="hourly")
        assert engine.snapshot().backup_settings.frequency == "none"


class TestRestoreBackup:
    @pytest.fixture
    async def backup_file(self, engine):
        result = await engine.create_backup()
        return result.file

    async def test_restore_reloads_state_and_clears_cart(self, engine, gateway, backup_file):
        await engine.inventory.update("inv-chair", quantity=1)
        engine.add_to_cart("inv-lamp", 1)

        assert await engine.restore_backup(backup_file)

        assert engine.store.find("inventory", "inv-chair").quantity == 10
        assert engine.snapshot().cart_lines == ()
        assert _messages(engine)[0] == "Data restored successfully"
        assert gateway.calls_to("restore_backup")[0]["file"] == backup_file

    async def test_rejected_restore_keeps_local_state(self, engine, backup_file):
        engine.add_to_cart("inv-lamp", 1)

        assert not await engine.restore_backup("backup-unknown.json")

        assert len(engine.snapshot().cart_lines) == 1
        assert _messages(engine)[0] == (
            "Data restore failed: Backup file backup-unknown.json is not a valid backup"
        )

    async def test_transport_failure(self, engine, gateway, backup_file):
        gateway.configure(should_succeed=False, failure_reason="Disk full", methods=["restore_backup"])

        assert not await engine.restore_backup(backup_file)
        assert _messages(engine)[0] == "Data restore failed: Disk full"
