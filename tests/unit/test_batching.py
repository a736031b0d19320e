"""Unit tests for batch partitioning."""
from __future__ import annotations

import math

import pytest

from sui_coin_merger.services.merger import partition_batches


class TestPartitionBatches:
    def test_sizes_for_1200_by_500(self, object_ids_factory) -> None:
        batches = partition_batches(object_ids_factory(1200), 500)
        assert [len(b) for b in batches] == [500, 500, 200]

    def test_preserves_order(self, object_ids_factory) -> None:
        ids = object_ids_factory(7)
        batches = partition_batches(ids, 3)
        assert [oid for batch in batches for oid in batch] == ids
        assert batches[0][0] == ids[0]
        assert batches[1][0] == ids[3]

    def test_empty_input(self) -> None:
        assert partition_batches([], 500) == []

    @pytest.mark.parametrize("count,size", [(1, 1), (5, 2), (500, 500), (501, 500), (1001, 500)])
    def test_batch_count_is_ceiling(self, object_ids_factory, count: int, size: int) -> None:
        batches = partition_batches(object_ids_factory(count), size)
        assert len(batches) == math.ceil(count / size)
        assert all(len(b) <= size for b in batches)

    @pytest.mark.parametrize("size", [0, -1])
    def test_rejects_non_positive_size(self, size: int) -> None:
        with pytest.raises(ValueError, match="batch_size must be positive"):
            partition_batches(["0x1", "0x2"], size)
