"""
Service interfaces (ABCs) for the external collaborators of ytreader.

These abstract base classes define the only operations ytreader relies on
from the cloud container API and the channel catalog, enabling dependency
injection, testing with fakes, and swappable implementations.
"""

from .catalog_interface import ChannelCatalog
from .container_api_interface import ContainerGroupApi

__all__ = [
    "ChannelCatalog",
    "ContainerGroupApi",
]
