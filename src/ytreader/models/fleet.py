"""
Pydantic models for the worker fleet: catalog entries, planned batches,
container group specs and launch results.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ytreader.exceptions import FleetLaunchError
from ytreader.models.enums import ContainerGroupState, Region, RestartPolicy
from ytreader.models.youtube_types import ChannelId


class CatalogChannel(BaseModel):
    """A channel listed in the crawl catalog."""

    model_config = ConfigDict(frozen=True)

    id: ChannelId
    title: Optional[str] = None


class ChannelBatch(BaseModel):
    """A planned partition of the catalog assigned to one worker group."""

    model_config = ConfigDict(frozen=True)

    name: str
    region: Region
    channel_ids: list[ChannelId] = Field(default_factory=list)


class FleetContainerSpec(BaseModel):
    """
    Everything the cloud API needs to create one worker container group.

    The group holds a single container named after the group.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    resource_group: str
    region: Region
    image: str
    registry: str
    registry_username: str = ""
    registry_password: SecretStr = SecretStr("")
    cpu: float = Field(default=1.0, gt=0)
    memory_gb: float = Field(default=2.0, gt=0)
    env_vars: dict[str, str] = Field(default_factory=dict)
    command: list[str] = Field(default_factory=list)
    restart_policy: RestartPolicy = RestartPolicy.NEVER


class ContainerGroup(BaseModel):
    """A container group as reported by the cloud API."""

    id: str
    name: str
    region: Optional[str] = None
    state: Optional[str] = None

    @property
    def is_running(self) -> bool:
        """Whether the group is in the non-terminal Running state."""
        return self.state == ContainerGroupState.RUNNING.value


class FleetLaunchResult(BaseModel):
    """
    Outcome of a fleet launch.

    Attributes
    ----------
    started : list[ContainerGroup]
        Groups created successfully.
    failed : dict[str, str]
        Group name to failure reason for groups whose precheck or creation
        failed. Failures never roll back other groups.
    """

    started: list[ContainerGroup] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        """True when every planned group was created."""
        return not self.failed

    def raise_for_failures(self) -> None:
        """
        Raise if any group failed to launch.

        Raises
        ------
        FleetLaunchError
            Carrying every failed group's reason.
        """
        if self.failed:
            raise FleetLaunchError(dict(self.failed))
