"""Project manifest modules."""

from xrelease.ecosystems.base import Ecosystem
from xrelease.ecosystems.nodejs import NodeJSEcosystem

__all__ = ["Ecosystem", "NodeJSEcosystem"]
