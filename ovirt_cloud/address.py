"""Node addresses derived from virtual machine network data."""

from collections import namedtuple

NODE_HOSTNAME = "Hostname"
NODE_EXTERNAL_IP = "ExternalIP"
NODE_INTERNAL_IP = "InternalIP"


NodeAddress = namedtuple("NodeAddress", ("address", "type"))


def extract_node_addresses(vm):
    """Return every address reported for `vm`, tagged as external.

    Addresses come out in nic, then device, then ip order. Nothing is
    sorted or deduplicated, so the result is a list of candidates rather
    than a primary address.

    :param vm: a :class:`ovirt_cloud.vm.VirtualMachine`
    :rtype: list of :class:`NodeAddress`
    """
    # TODO tell a primary address apart and report the VM fqdn as a
    # Hostname address once the engine query follows it.
    addresses = []
    for nic in vm.nics:
        for device in nic.devices:
            for ip in device.ips:
                addresses.append(NodeAddress(ip.address, NODE_EXTERNAL_IP))
    return addresses
