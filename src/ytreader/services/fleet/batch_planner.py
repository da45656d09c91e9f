"""
Partitioning of a channel catalog into worker batches.

Channels are shuffled before partitioning so each worker group gets a
random slice of the catalog rather than a run of neighbouring entries.
Batch sizes within one plan differ by at most one.
"""

from __future__ import annotations

import math
import random
from collections.abc import Iterable, Sequence

from ytreader.models.enums import REGIONS, Region
from ytreader.models.fleet import ChannelBatch


def batch_name(prefix: str, index: int) -> str:
    """Name of the worker group running batch ``index``."""
    return f"{prefix}-fleet-{index}"


def batch_sizes(total: int, target_size: int) -> list[int]:
    """
    Near-equal batch sizes for ``total`` items.

    ``ceil(total / target_size)`` batches are used; the first
    ``total % batch_count`` batches hold one extra item.

    >>> batch_sizes(10, 3)
    [3, 3, 2, 2]
    """
    if target_size < 1:
        raise ValueError(f"target_size must be at least 1, got {target_size}")
    if total <= 0:
        return []
    batch_count = math.ceil(total / target_size)
    base, extra = divmod(total, batch_count)
    return [base + 1 if i < extra else base for i in range(batch_count)]


def plan_batches(
    channel_ids: Iterable[str],
    target_size: int,
    name_prefix: str,
    regions: Sequence[Region] = REGIONS,
    rng: random.Random | None = None,
) -> list[ChannelBatch]:
    """
    Partition channels into randomized, near-equal, region-assigned batches.

    Parameters
    ----------
    channel_ids : Iterable[str]
        Channels to plan; duplicates are planned once.
    target_size : int
        Maximum channels per batch before splitting further.
    name_prefix : str
        Prefix for generated batch names (``<prefix>-fleet-<i>``).
    regions : Sequence[Region], optional
        Regions assigned round-robin by batch index (default: ``REGIONS``).
    rng : random.Random | None, optional
        Random source for the shuffle; pass a seeded instance for
        reproducible plans (default: a fresh unseeded ``random.Random``).

    Returns
    -------
    list[ChannelBatch]
        Batches in index order. Empty when there are no channels.

    Raises
    ------
    ValueError
        If ``target_size`` is below 1 or ``regions`` is empty.
    """
    if not regions:
        raise ValueError("At least one region is required")

    unique_ids = list(dict.fromkeys(channel_ids))
    sizes = batch_sizes(len(unique_ids), target_size)

    rng = rng if rng is not None else random.Random()
    rng.shuffle(unique_ids)

    batches: list[ChannelBatch] = []
    start = 0
    for index, size in enumerate(sizes):
        batches.append(
            ChannelBatch(
                name=batch_name(name_prefix, index),
                region=regions[index % len(regions)],
                channel_ids=unique_ids[start : start + size],
            )
        )
        start += size
    return batches
