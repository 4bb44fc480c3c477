"""Tests for rating score validation and read-time averages."""

import pytest

from trackrate.domain.catalog.model.value import ArtistId, TrackId
from trackrate.domain.rating.model.rating import ArtistScore, TrackScore
from trackrate.domain.rating.model.scores import RatingScores
from trackrate.domain.shared.error import ValidationError

VALID = {"vocals": 8, "production": 7, "lyrics": 6, "quality": 9, "vibe": 10}


class TestRatingScoresParse:
    def test_valid_scores(self):
        scores = RatingScores.parse(VALID)

        assert scores.vocals == 8
        assert scores.mean == pytest.approx(8.0)

    def test_bounds_are_inclusive(self):
        low = RatingScores.parse({name: 0 for name in VALID})
        high = RatingScores.parse({name: 10 for name in VALID})

        assert low.mean == 0
        assert high.mean == 10

    def test_missing_field(self):
        raw = {k: v for k, v in VALID.items() if k != "lyrics"}

        with pytest.raises(ValidationError) as exc_info:
            RatingScores.parse(raw)

        assert exc_info.value.code == "MISSING_RATING_FIELDS"
        assert exc_info.value.field == "lyrics"

    def test_null_counts_as_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            RatingScores.parse({**VALID, "vibe": None})
        assert exc_info.value.code == "MISSING_RATING_FIELDS"

    def test_out_of_range_names_field(self):
        with pytest.raises(ValidationError) as exc_info:
            RatingScores.parse({**VALID, "vocals": 11})

        assert exc_info.value.code == "RATING_OUT_OF_RANGE"
        assert exc_info.value.field == "vocals"

    def test_negative(self):
        with pytest.raises(ValidationError) as exc_info:
            RatingScores.parse({**VALID, "quality": -1})
        assert exc_info.value.field == "quality"

    @pytest.mark.parametrize("value", [7.0, 7.5, "7", True])
    def test_non_integer(self, value):
        with pytest.raises(ValidationError) as exc_info:
            RatingScores.parse({**VALID, "production": value})

        assert exc_info.value.code == "INVALID_RATING_TYPE"
        assert exc_info.value.field == "production"

    def test_extra_keys_ignored(self):
        assert RatingScores.parse({**VALID, "bonus": 99}) == RatingScores(**VALID)


class TestScoreViews:
    def test_unrated_track(self):
        score = TrackScore.from_scores(TrackId(1), [])

        assert score.rating_count == 0
        assert score.overall is None

    def test_track_mean_of_rating_means(self):
        scores = [
            RatingScores(vocals=10, production=10, lyrics=10, quality=10, vibe=10),
            RatingScores(vocals=5, production=5, lyrics=5, quality=5, vibe=5),
        ]

        score = TrackScore.from_scores(TrackId(1), scores)

        assert score.rating_count == 2
        assert score.overall == pytest.approx(7.5)

    def test_artist_mean_of_track_means(self):
        tracks = [
            TrackScore(track_id=TrackId(1), rating_count=10, overall=9.0),
            TrackScore(track_id=TrackId(2), rating_count=1, overall=3.0),
            TrackScore(track_id=TrackId(3), rating_count=0, overall=None),
        ]

        score = ArtistScore.from_tracks(ArtistId(1), tracks)

        assert score.rated_tracks == 2
        assert score.overall == pytest.approx(6.0)

    def test_artist_without_ratings(self):
        score = ArtistScore.from_tracks(ArtistId(1), [])
        assert score.overall is None
