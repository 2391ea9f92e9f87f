"""Resources — one check class per kind of host state.

Public re-exports for convenient access.
"""

from hostspec.resources.addr import Addr
from hostspec.resources.base import Resource
from hostspec.resources.command import Command
from hostspec.resources.dns import DNS
from hostspec.resources.file import File
from hostspec.resources.group import Group
from hostspec.resources.include import Include
from hostspec.resources.package import Package, PackageDeb, PackageNull, PackageRpm
from hostspec.resources.port import Port
from hostspec.resources.process import Process
from hostspec.resources.service import Service, ServiceDbus, ServiceInit
from hostspec.resources.user import User

__all__ = [
    "DNS",
    "Addr",
    "Command",
    "File",
    "Group",
    "Include",
    "Package",
    "PackageDeb",
    "PackageNull",
    "PackageRpm",
    "Port",
    "Process",
    "Resource",
    "Service",
    "ServiceDbus",
    "ServiceInit",
    "User",
]
