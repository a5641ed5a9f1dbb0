"""Smoke tests for the app structure and the data/media sub-apps."""

import pytest


class TestAppStructure:
    def test_help_lists_command_groups(self, invoke):
        result = invoke("--help")

        assert result.exit_code == 0
        for name in ("tracks", "artists", "users", "browse", "dashboard", "data", "media"):
            assert name in result.stdout

    def test_version(self, invoke):
        result = invoke("version")
        assert result.exit_code == 0
        assert "EiMusic Admin" in result.stdout

    @pytest.mark.parametrize("kind", ["tracks", "albums", "artists", "videos", "users"])
    def test_editable_kinds_have_write_commands(self, invoke, kind):
        result = invoke(kind, "--help")

        assert result.exit_code == 0
        for command in ("list", "show", "create", "update", "delete"):
            assert command in result.stdout

    @pytest.mark.parametrize("kind", ["transactions", "plans"])
    def test_revenue_kinds_are_read_only(self, invoke, kind):
        result = invoke(kind, "--help")

        assert result.exit_code == 0
        assert "list" in result.stdout
        assert "create" not in result.stdout


class TestDataCommands:
    def test_init_creates_database(self, invoke, tmp_path):
        result = invoke("data", "init")

        assert result.exit_code == 0
        assert "Base de dados pronta" in result.stdout
        assert (tmp_path / "eimusic.db").exists()

    def test_seed_reports_counts(self, invoke):
        result = invoke("data", "seed")

        assert result.exit_code == 0
        assert "Dados de demonstração" in result.stdout
        assert "48" in result.stdout

    def test_seed_twice_is_skipped(self, invoke, seeded):
        result = invoke("data", "seed")

        assert result.exit_code == 0
        assert "nada foi inserido" in result.stdout


class TestMediaCommands:
    def test_upload_without_credentials_fails(self, invoke, tmp_path):
        cover = tmp_path / "capa.png"
        cover.write_bytes(b"\x89PNG\r\n\x1a\n")

        result = invoke("media", "upload", str(cover))

        assert result.exit_code == 1
        assert "não configurado" in result.stdout

    def test_delete_without_credentials_is_reported(self, invoke):
        result = invoke("media", "delete", "eimusic/capa")

        assert result.exit_code == 1
        assert "não foi removida" in result.stdout
