__all__ = ["CloudProvider", "PROVIDER_NAME", "VirtualMachine"]

from ovirt_cloud.provider import CloudProvider, PROVIDER_NAME
from ovirt_cloud.vm import VirtualMachine
