"""
Fleet orchestrator for crawl worker container groups.

Each worker group moves through ``Absent -> Running -> (Stopped | Absent)``.
Before a group is created the orchestrator looks it up by name: a running
group is never raced (``ConflictError``); a stale, terminated group is
deleted first. Fleet launches precheck every group before creating any,
then create the prechecked groups through a bounded worker pool. A failure
is confined to its own group.

Functions
---------
run_bounded
    Apply an async operation to items with at most ``limit`` in flight.
worker_args
    Build the worker command-line arguments for a batch.

Classes
-------
FleetOrchestrator
    Prechecks, creates, inspects and removes worker groups.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable, Sequence
from typing import Optional, TypeVar

from ytreader.config.settings import Settings
from ytreader.exceptions import ConflictError
from ytreader.models.enums import REGIONS, Region, RestartPolicy, UpdateType
from ytreader.models.fleet import (
    ChannelBatch,
    ContainerGroup,
    FleetContainerSpec,
    FleetLaunchResult,
)
from ytreader.services.fleet.batch_planner import plan_batches
from ytreader.services.interfaces import ChannelCatalog, ContainerGroupApi

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

STORAGE_CS_ENV_VAR = "YTREADER_STORAGE_CS"
ENVIRONMENT_ENV_VAR = "YTREADER_ENV"

_CHANNEL_SEPARATOR = "|"


async def run_bounded(
    items: Sequence[T],
    operation: Callable[[T], Awaitable[R]],
    limit: int,
) -> list[R | Exception]:
    """
    Apply ``operation`` to every item using a pool of ``limit`` workers.

    At most ``limit`` operations are in flight; the rest wait in a queue.
    An exception raised for one item is returned in that item's slot and
    does not stop the others.

    Parameters
    ----------
    items : Sequence[T]
        Inputs, processed in queue order.
    operation : Callable[[T], Awaitable[R]]
        Async operation to apply.
    limit : int
        Maximum concurrent operations.

    Returns
    -------
    list[R | Exception]
        One result or exception per item, in input order.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    results: dict[int, R | Exception] = {}
    queue: asyncio.Queue[tuple[int, T]] = asyncio.Queue()
    for index, item in enumerate(items):
        queue.put_nowait((index, item))

    async def _worker() -> None:
        while True:
            try:
                index, item = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                results[index] = await operation(item)
            except Exception as e:
                results[index] = e

    await asyncio.gather(*(_worker() for _ in range(min(limit, len(items)))))
    return [results[i] for i in range(len(items))]


def worker_args(update_type: UpdateType, channel_ids: Sequence[str]) -> list[str]:
    """
    Command-line arguments a worker runs its batch with.

    >>> worker_args(UpdateType.STANDARD, ["UCa", "UCb"])
    ['update', '-t', 'standard', '-c', 'UCa|UCb']
    """
    return [
        "update",
        "-t",
        update_type.value,
        "-c",
        _CHANNEL_SEPARATOR.join(channel_ids),
    ]


class FleetOrchestrator:
    """
    Launches crawl worker container groups without racing live workers.

    Parameters
    ----------
    api : ContainerGroupApi
        Cloud container-group API.
    settings : Settings
        Container image, registry, sizing, concurrency and environment.
    rng : random.Random | None, optional
        Random source for batch shuffling and single-group region choice
        (default: a fresh unseeded ``random.Random``).
    regions : Sequence[Region], optional
        Placement regions (default: ``REGIONS``).

    Examples
    --------
    >>> orchestrator = FleetOrchestrator(api, settings)
    >>> result = await orchestrator.start_fleet(channel_ids, UpdateType.STANDARD)
    >>> print([g.name for g in result.started], result.failed)
    """

    def __init__(
        self,
        api: ContainerGroupApi,
        settings: Settings,
        rng: random.Random | None = None,
        regions: Sequence[Region] = REGIONS,
    ) -> None:
        self.api = api
        self.settings = settings
        self.rng = rng if rng is not None else random.Random()
        self.regions = regions

    # ------------------------------------------------------------------
    # Single group lifecycle
    # ------------------------------------------------------------------

    async def ensure_not_running(self, name: str) -> None:
        """
        Make sure no group named ``name`` is running, deleting a stale one.

        Raises
        ------
        ConflictError
            If the group exists and is Running. Nothing is deleted.
        """
        group = await self.api.get_by_name(self.settings.resource_group, name)
        if group is None:
            return
        if group.is_running:
            raise ConflictError(group_name=name, state=group.state)
        logger.info(
            "Deleting stale container group %s (state: %s)", name, group.state
        )
        await self.api.delete(group.id)

    def build_container_spec(
        self, name: str, region: Region, args: Sequence[str]
    ) -> FleetContainerSpec:
        """Describe a single-container worker group running ``args``."""
        s = self.settings
        return FleetContainerSpec(
            name=name,
            resource_group=s.resource_group,
            region=region,
            image=s.container_image,
            registry=s.container_registry,
            registry_username=s.container_registry_username,
            registry_password=s.container_registry_password,
            cpu=s.container_cores,
            memory_gb=s.container_memory_gb,
            env_vars={
                STORAGE_CS_ENV_VAR: s.storage_connection_string.get_secret_value(),
                ENVIRONMENT_ENV_VAR: s.environment,
            },
            command=[*s.container_command_args, *args],
            restart_policy=RestartPolicy.NEVER,
        )

    async def start(self, args: Sequence[str]) -> ContainerGroup:
        """
        Launch one worker group named after the configured container name.

        The region is picked at random. Errors propagate to the caller.

        Raises
        ------
        ConflictError
            If a group with the configured name is already running.
        """
        name = self.settings.container_name
        region = self.rng.choice(list(self.regions))
        logger.info(
            "Starting container %s %s", self.settings.container_image, " ".join(args)
        )
        await self.ensure_not_running(name)
        return await self.api.create(self.build_container_spec(name, region, args))

    # ------------------------------------------------------------------
    # Fleet
    # ------------------------------------------------------------------

    def plan(self, channel_ids: Sequence[str]) -> list[ChannelBatch]:
        """Partition channels into batches named after the container name."""
        return plan_batches(
            channel_ids,
            target_size=self.settings.channels_per_container,
            name_prefix=self.settings.container_name,
            regions=self.regions,
            rng=self.rng,
        )

    async def start_fleet(
        self, channel_ids: Sequence[str], update_type: UpdateType
    ) -> FleetLaunchResult:
        """
        Plan batches and launch one worker group per batch.

        Every group is prechecked before any is created. Groups whose
        precheck fails are not created; creation failures do not affect
        other groups.

        Parameters
        ----------
        channel_ids : Sequence[str]
            Channels to crawl.
        update_type : UpdateType
            Crawl kind passed to every worker.

        Returns
        -------
        FleetLaunchResult
            Created groups and per-group failure reasons.
        """
        batches = self.plan(channel_ids)
        result = FleetLaunchResult()
        if not batches:
            logger.warning("No channels to launch a fleet for")
            return result

        prechecks = await run_bounded(
            batches,
            lambda b: self.ensure_not_running(b.name),
            self.settings.precheck_parallel,
        )
        ready: list[ChannelBatch] = []
        for batch, outcome in zip(batches, prechecks):
            if isinstance(outcome, Exception):
                logger.error("Precheck failed for %s: %s", batch.name, outcome)
                result.failed[batch.name] = str(outcome)
            else:
                ready.append(batch)

        async def _create(batch: ChannelBatch) -> ContainerGroup:
            spec = self.build_container_spec(
                batch.name, batch.region, worker_args(update_type, batch.channel_ids)
            )
            return await self.api.create(spec)

        created = await run_bounded(ready, _create, self.settings.create_parallel)
        for batch, outcome in zip(ready, created):
            if isinstance(outcome, Exception):
                logger.error("Failed to create %s: %s", batch.name, outcome)
                result.failed[batch.name] = str(outcome)
            else:
                result.started.append(outcome)

        logger.info(
            "Started fleet containers: %s",
            ", ".join(g.name for g in result.started),
        )
        return result

    async def start_fleet_from_catalog(
        self, catalog: ChannelCatalog, update_type: UpdateType
    ) -> FleetLaunchResult:
        """Launch a fleet over every channel in ``catalog``."""
        channels = await catalog.list_channels()
        return await self.start_fleet([c.id for c in channels], update_type)

    async def fleet_status(
        self, names: Sequence[str]
    ) -> dict[str, Optional[ContainerGroup]]:
        """Look up each named group; absent groups map to None."""
        groups = await run_bounded(
            names,
            lambda n: self.api.get_by_name(self.settings.resource_group, n),
            self.settings.precheck_parallel,
        )
        status: dict[str, Optional[ContainerGroup]] = {}
        for name, group in zip(names, groups):
            if isinstance(group, Exception):
                raise group
            status[name] = group
        return status

    async def stop_fleet(self, names: Sequence[str]) -> dict[str, str]:
        """
        Delete every existing group in ``names``, running or not.

        Returns
        -------
        dict[str, str]
            Group name to failure reason for deletions that failed.
        """

        async def _delete(name: str) -> None:
            group = await self.api.get_by_name(self.settings.resource_group, name)
            if group is not None:
                logger.info("Deleting container group %s", name)
                await self.api.delete(group.id)

        outcomes = await run_bounded(names, _delete, self.settings.precheck_parallel)
        failures = {
            name: str(outcome)
            for name, outcome in zip(names, outcomes)
            if isinstance(outcome, Exception)
        }
        for name, reason in failures.items():
            logger.error("Failed to delete %s: %s", name, reason)
        return failures
