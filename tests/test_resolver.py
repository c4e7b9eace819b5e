"""Tests for placement resolution."""

import pytest
from pathlib import Path
from unittest.mock import patch

from genre_organizer.core.resolver import PlacementResolver, title_case
from genre_organizer.exceptions import FileOperationError, InvalidGenreError
from genre_organizer.models.config import GenreNamePolicy
from genre_organizer.models.placement import PlacementAction
from genre_organizer.models.track import Track

from conftest import make_track


@pytest.fixture
def genres_root(tmp_path) -> Path:
    return tmp_path / "Music" / "Genres"


@pytest.fixture
def resolver(genres_root):
    return PlacementResolver(genres_root)


def _track(tmp_path, name="song.mp3", genre="Rock") -> Track:
    path = make_track(tmp_path / "Music" / name, genre)
    track = Track(path=path)
    track.classify(genre)
    return track


class TestTitleCase:

    @pytest.mark.parametrize("raw,expected", [
        ("rock", "Rock"),
        ("hip hop", "Hip Hop"),
        ("r&b", "R&B"),
        ("hip-hop", "Hip-Hop"),
        ("EDM", "EDM"),
        ("80s pop", "80s Pop"),
        ("drum_and_bass", "Drum_and_bass"),
        ("électro", "Électro"),
    ])
    def test_title_case(self, raw, expected):
        assert title_case(raw) == expected


class TestBucketName:

    def test_empty_genre_is_no_genre(self, resolver):
        assert resolver.bucket_name("") == "No Genre"
        assert resolver.bucket_name(None) == "No Genre"

    def test_whitespace_genre_is_no_genre(self, resolver):
        assert resolver.bucket_name("   ") == "No Genre"

    def test_genre_is_stripped_and_title_cased(self, resolver):
        assert resolver.bucket_name("  hip hop ") == "Hip Hop"

    def test_separators_are_flattened(self, resolver):
        assert resolver.bucket_name("rock/pop") == "Rock_Pop"
        assert resolver.bucket_name("rock\\pop") == "Rock_Pop"

    def test_reserved_characters_are_cleaned(self, resolver):
        assert resolver.bucket_name("jazz: live") == "Jazz - Live"
        assert resolver.bucket_name("what?") == "What"
        assert resolver.bucket_name('"indie"') == "'Indie'"

    def test_only_reserved_characters_is_no_genre(self, resolver):
        assert resolver.bucket_name("???") == "No Genre"

    def test_dot_names_are_rejected(self, resolver):
        with pytest.raises(InvalidGenreError):
            resolver.bucket_name("..")
        with pytest.raises(InvalidGenreError):
            resolver.bucket_name("...")

    def test_reject_policy(self, genres_root):
        resolver = PlacementResolver(genres_root, name_policy=GenreNamePolicy.REJECT)

        assert resolver.bucket_name("rock") == "Rock"
        with pytest.raises(InvalidGenreError, match="cannot be used as a folder name"):
            resolver.bucket_name("rock/pop")

    def test_custom_sentinel(self, genres_root):
        resolver = PlacementResolver(genres_root, no_genre_dir="Unknown")

        assert resolver.bucket_name("") == "Unknown"


class TestResolve:

    def test_first_file_gets_bucket(self, resolver, genres_root, tmp_path):
        track = _track(tmp_path, genre="rock")

        placement = resolver.resolve(track)

        assert placement.action is PlacementAction.MOVE
        assert placement.source == track.path
        assert placement.destination == genres_root / "Rock" / "song.mp3"
        assert placement.bucket == "Rock"
        assert placement.created_folders == (genres_root / "Rock",)
        assert (genres_root / "Rock").is_dir()

    def test_existing_bucket_is_reused(self, resolver, genres_root, tmp_path):
        (genres_root / "Rock").mkdir(parents=True)

        placement = resolver.resolve(_track(tmp_path))

        assert placement.created_folders == ()

    def test_no_genre_bucket(self, resolver, genres_root, tmp_path):
        placement = resolver.resolve(_track(tmp_path, name="track.flac", genre=""))

        assert placement.destination == genres_root / "No Genre" / "track.flac"

    def test_name_collision_goes_to_duplicate(self, resolver, genres_root, tmp_path):
        occupant = make_track(genres_root / "Rock" / "song.mp3", "Rock")

        placement = resolver.resolve(_track(tmp_path))

        assert placement.action is PlacementAction.DUPLICATE
        assert placement.is_duplicate
        assert placement.destination == genres_root / "Duplicate" / "song.mp3"
        assert placement.bucket == "Rock"
        assert placement.created_folders == (genres_root / "Duplicate",)
        assert occupant.read_bytes() == b"genre:Rock"

    def test_collision_ignores_content(self, resolver, genres_root, tmp_path):
        make_track(genres_root / "Rock" / "song.mp3", "something else entirely")

        assert resolver.resolve(_track(tmp_path)).is_duplicate

    def test_folder_with_same_name_counts_as_collision(self, resolver, genres_root, tmp_path):
        (genres_root / "Rock" / "song.mp3").mkdir(parents=True)

        assert resolver.resolve(_track(tmp_path)).is_duplicate

    def test_same_name_in_other_bucket_is_not_duplicate(self, resolver, genres_root, tmp_path):
        make_track(genres_root / "Jazz" / "song.mp3", "Jazz")

        assert not resolver.resolve(_track(tmp_path)).is_duplicate

    def test_occupied_duplicate_slot_is_reused(self, resolver, genres_root, tmp_path):
        make_track(genres_root / "Rock" / "song.mp3", "Rock")
        make_track(genres_root / "Duplicate" / "song.mp3", "Rock")

        placement = resolver.resolve(_track(tmp_path))

        assert placement.action is PlacementAction.DUPLICATE
        assert placement.destination == genres_root / "Duplicate" / "song.mp3"
        assert placement.created_folders == ()

    def test_bucket_creation_failure(self, resolver, genres_root, tmp_path):
        genres_root.parent.mkdir(parents=True, exist_ok=True)
        genres_root.write_text("a file where the genres folder should be")

        with pytest.raises(FileOperationError, match="Failed to create folder"):
            resolver.resolve(_track(tmp_path))

    def test_existence_check_failure(self, resolver, tmp_path):
        track = _track(tmp_path)

        with patch('genre_organizer.core.resolver.os.lstat',
                   side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(FileOperationError, match="Failed to check"):
                resolver.resolve(track)

    def test_folder_check_failure(self, resolver, tmp_path):
        track = _track(tmp_path)

        with patch('genre_organizer.core.resolver.Path.is_dir',
                   side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(FileOperationError, match="Failed to create folder"):
                resolver.resolve(track)
