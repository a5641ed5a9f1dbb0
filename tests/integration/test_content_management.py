"""ManageContent use case against the seeded database."""

import pytest

from eimusic.application.use_cases import (
    CreateRecordCommand,
    DeleteRecordCommand,
    ManageContentUseCase,
    UpdateRecordCommand,
)
from eimusic.domain.errors import NotFoundError, ValidationError


@pytest.fixture
def use_case(notifications):
    return ManageContentUseCase(notifications)


class TestCreate:
    async def test_track_joins_artist_and_album_names(
        self, use_case, seeded_uow, notifications
    ):
        result = await use_case.create(
            CreateRecordCommand(
                "tracks",
                {"title": "Nova Canção", "artist_id": "1", "album_id": "1", "duration": "201"},
            ),
            seeded_uow,
        )

        track = await seeded_uow.get_track_repository().get_by_id(result.record_id)
        assert track.artist_name == "Lizha James"
        assert track.album_title == "Ngoma Yanga"
        assert track.duration == 201
        assert track.status == "draft"

        [notification] = notifications.active
        assert notification.level == "success"
        assert notification.title == "Faixa criada com sucesso"
        assert notification.message == "Nova Canção"

    async def test_unknown_artist_rejected(self, use_case, seeded_uow, notifications):
        with pytest.raises(ValidationError, match="Artist 99 does not exist"):
            await use_case.create(
                CreateRecordCommand("albums", {"title": "Perdido", "artist_id": "99"}),
                seeded_uow,
            )

        assert notifications.active[-1].title == "Erro ao salvar"
        assert await seeded_uow.get_album_repository().count() == 5

    async def test_duplicate_email_rejected(self, use_case, seeded_uow):
        with pytest.raises(ValidationError, match="already exists"):
            await use_case.create(
                CreateRecordCommand(
                    "users", {"name": "Outro João", "email": "JOAO.MACHAVA@gmail.com"}
                ),
                seeded_uow,
            )

    async def test_missing_required_field(self, use_case, seeded_uow):
        with pytest.raises(ValidationError, match="Missing required field"):
            await use_case.create(CreateRecordCommand("users", {"name": "Ana"}), seeded_uow)


class TestUpdate:
    async def test_partial_update_keeps_other_fields(
        self, use_case, seeded_uow, notifications
    ):
        result = await use_case.update(
            UpdateRecordCommand("artists", 1, {"verified": "não"}), seeded_uow
        )

        assert result.entity.verified is False
        assert result.entity.genre == "pandza"
        assert notifications.active[-1].title == "Artista atualizado com sucesso"

    async def test_invalid_status_leaves_record_untouched(self, use_case, seeded_uow):
        with pytest.raises(ValidationError):
            await use_case.update(
                UpdateRecordCommand("tracks", 1, {"status": "archived"}), seeded_uow
            )

        track = await seeded_uow.get_track_repository().get_by_id(1)
        assert track.status == "published"

    async def test_user_may_keep_own_email(self, use_case, seeded_uow):
        result = await use_case.update(
            UpdateRecordCommand("users", 1, {"email": "joao.machava@gmail.com"}),
            seeded_uow,
        )
        assert result.record_id == 1

    async def test_empty_changes(self, use_case, seeded_uow):
        with pytest.raises(ValidationError, match="Nothing to update"):
            await use_case.update(UpdateRecordCommand("tracks", 1, {}), seeded_uow)

    async def test_missing_record(self, use_case, seeded_uow, notifications):
        with pytest.raises(NotFoundError):
            await use_case.update(
                UpdateRecordCommand("videos", 99, {"title": "x"}), seeded_uow
            )
        assert notifications.active[-1].level == "error"


class TestDelete:
    async def test_soft_delete_hides_record(self, use_case, seeded_uow, notifications):
        await use_case.delete(DeleteRecordCommand("videos", 1), seeded_uow)

        assert await seeded_uow.get_video_repository().find_by_id(1) is None
        assert await seeded_uow.get_video_repository().count() == 4
        assert notifications.active[-1].title == "Vídeo excluído com sucesso"
        assert notifications.active[-1].message == "ID 1"

    async def test_deleting_twice_reports_error(self, use_case, seeded_uow, notifications):
        await use_case.delete(DeleteRecordCommand("tracks", 2), seeded_uow)

        with pytest.raises(NotFoundError):
            await use_case.delete(DeleteRecordCommand("tracks", 2), seeded_uow)
        assert notifications.active[-1].title == "Erro ao excluir"

    async def test_get_skips_deleted(self, use_case, seeded_uow):
        await use_case.delete(DeleteRecordCommand("artists", 5), seeded_uow)
        with pytest.raises(NotFoundError):
            await use_case.get("artists", 5, seeded_uow)
