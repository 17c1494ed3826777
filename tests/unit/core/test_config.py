"""Unit tests for StreamConfig validation."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from shardpoll.core import MAX_RECORDS_PER_FETCH, IteratorType, StreamConfig


class TestStreamConfigDefaults:
    """Test StreamConfig defaults and immutability."""

    def test_defaults(self):
        config = StreamConfig()
        assert config.interval == 1.0
        assert config.iterator_type is IteratorType.LATEST
        assert config.limit == 1000
        assert config.starting_sequence_number is None
        assert config.timestamp is None

    def test_frozen(self):
        config = StreamConfig()
        with pytest.raises(ValidationError):
            config.limit = 5

    def test_iterator_type_from_string(self):
        config = StreamConfig(iterator_type="TRIM_HORIZON")
        assert config.iterator_type is IteratorType.TRIM_HORIZON


class TestStreamConfigBounds:
    """Test numeric bounds."""

    @pytest.mark.parametrize("interval", [0, -1.0])
    def test_interval_must_be_positive(self, interval):
        with pytest.raises(ValidationError):
            StreamConfig(interval=interval)

    def test_limit_bounds(self):
        StreamConfig(limit=1)
        StreamConfig(limit=MAX_RECORDS_PER_FETCH)
        with pytest.raises(ValidationError):
            StreamConfig(limit=0)
        with pytest.raises(ValidationError):
            StreamConfig(limit=MAX_RECORDS_PER_FETCH + 1)


class TestStreamConfigIteratorParameters:
    """Test policy parameters match the iterator type."""

    @pytest.mark.parametrize(
        "iterator_type",
        [IteratorType.AT_SEQUENCE_NUMBER, IteratorType.AFTER_SEQUENCE_NUMBER],
    )
    def test_sequence_number_required(self, iterator_type):
        with pytest.raises(ValidationError, match="requires starting_sequence_number"):
            StreamConfig(iterator_type=iterator_type)

        config = StreamConfig(iterator_type=iterator_type, starting_sequence_number="4959")
        assert config.starting_sequence_number == "4959"

    def test_sequence_number_rejected_for_latest(self):
        with pytest.raises(ValidationError, match="not used by LATEST"):
            StreamConfig(starting_sequence_number="4959")

    def test_timestamp_required(self):
        with pytest.raises(ValidationError, match="AT_TIMESTAMP requires timestamp"):
            StreamConfig(iterator_type=IteratorType.AT_TIMESTAMP)

        ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
        config = StreamConfig(iterator_type=IteratorType.AT_TIMESTAMP, timestamp=ts)
        assert config.timestamp == ts

    def test_naive_timestamp_is_taken_as_utc(self):
        config = StreamConfig(
            iterator_type=IteratorType.AT_TIMESTAMP, timestamp=datetime(2024, 1, 1)
        )
        assert config.timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert config.timestamp.timestamp() == 1704067200.0

    def test_aware_timestamp_keeps_its_offset(self):
        ts = datetime(2024, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))
        config = StreamConfig(iterator_type=IteratorType.AT_TIMESTAMP, timestamp=ts)
        assert config.timestamp.utcoffset() == timedelta(hours=2)
        assert config.timestamp.timestamp() == 1704067200.0

    def test_timestamp_rejected_for_trim_horizon(self):
        with pytest.raises(ValidationError, match="not used by TRIM_HORIZON"):
            StreamConfig(
                iterator_type=IteratorType.TRIM_HORIZON,
                timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
            )
