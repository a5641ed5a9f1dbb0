"""Domain layer test fixtures - plain records and entities, no database.

Record lists mirror what listing screens receive: flat mappings produced by
``to_record`` on the catalog entities.
"""

from datetime import date

import pytest

from eimusic.domain.entities import Artist, Track


@pytest.fixture
def twelve_records():
    """Twelve numbered records for pagination tests."""
    return [{"id": i, "title": f"Faixa {i:02d}", "plays": i * 100} for i in range(1, 13)]


@pytest.fixture
def track_records():
    """A small catalog of track records."""
    tracks = [
        Track(
            id=1,
            title="Nita Famba",
            artist_name="Lizha James",
            album_title="Ngoma Yanga",
            duration=234,
            plays=45600,
            streams=45600,
            status="published",
            release_date=date(2023, 5, 18),
        ),
        Track(
            id=2,
            title="Tsovani Wanga",
            artist_name="MC Roger",
            album_title="Moçambique Sempre",
            duration=198,
            plays=32000,
            streams=32000,
            status="published",
            release_date=date(2023, 6, 22),
        ),
        Track(
            id=3,
            title="Sorriso Lindo",
            artist_name="Lizha James",
            album_title="Ngoma Yanga",
            duration=227,
            plays=19800,
            streams=19800,
            status="draft",
            release_date=date(2023, 12, 10),
        ),
        Track(
            id=4,
            title="Eparaka",
            artist_name="Valter Artístico",
            album_title="Evolução",
            duration=265,
            plays=28500,
            streams=28500,
            status="published",
            release_date=date(2023, 7, 10),
        ),
        Track(
            id=5,
            title="Sonho Real",
            artist_name="MC Roger",
            duration=204,
            plays=14200,
            streams=14200,
            status="removed",
            release_date=date(2023, 8, 12),
        ),
    ]
    return [track.to_record() for track in tracks]


@pytest.fixture
def artist():
    return Artist(
        id=1,
        name="Lizha James",
        email="lizha@eimusic.co.mz",
        genre="pandza",
        verified=True,
        joined_date=date(2023, 4, 15),
    )
