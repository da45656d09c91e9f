"""
Abstract Base Class for the cloud container-group API.

The fleet orchestrator depends on exactly three operations and on the
``state`` of the groups they return. Implementations wrap a concrete cloud
SDK; tests use in-memory fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...models.fleet import ContainerGroup, FleetContainerSpec


class ContainerGroupApi(ABC):
    """
    Abstract interface for creating and removing container groups.

    Examples
    --------
    >>> class InMemoryContainerGroupApi(ContainerGroupApi):
    ...     async def get_by_name(self, resource_group, name):
    ...         return self.groups.get(name)
    """

    @abstractmethod
    async def get_by_name(
        self, resource_group: str, name: str
    ) -> Optional[ContainerGroup]:
        """
        Look up a container group by name.

        Parameters
        ----------
        resource_group : str
            Resource group the group lives in.
        name : str
            Container group name.

        Returns
        -------
        Optional[ContainerGroup]
            The group, or None if no group with that name exists.
        """
        pass

    @abstractmethod
    async def delete(self, group_id: str) -> None:
        """
        Delete a container group.

        Parameters
        ----------
        group_id : str
            Provider-specific ID of the group (``ContainerGroup.id``).
        """
        pass

    @abstractmethod
    async def create(self, spec: FleetContainerSpec) -> ContainerGroup:
        """
        Create a container group and start its container.

        Parameters
        ----------
        spec : FleetContainerSpec
            Full description of the group to create.

        Returns
        -------
        ContainerGroup
            The created group.
        """
        pass
