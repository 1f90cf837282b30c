"""Cloud provider exposing oVirt virtual machines as cluster nodes."""

from collections import namedtuple
import logging

from twisted.internet.defer import fail, inlineCallbacks, succeed

from ovirt_cloud.address import extract_node_addresses
from ovirt_cloud.directory import VMDirectory, index_by_name
from ovirt_cloud.errors import (
    ConfigurationError, InstanceNotFound, Unimplemented)
from ovirt_cloud.vm import VM_STATUS_DOWN


# The canonical name the provider registers under. It must differ from
# the in-tree implementation name, "ovirt"; "ecp" stands for External
# Cloud Provider.
PROVIDER_NAME = "ovirt-ecp"

log = logging.getLogger("ovirt_cloud.provider")


Capability = namedtuple("Capability", ("implementation", "supported"))

UNSUPPORTED = Capability(None, False)


def vm_exists(vm):
    """Tell whether `vm` should still be considered a live instance.

    Statuses of up, unknown and not responding most likely still mean a
    running instance, so only 'down' is taken as a machine that is gone.
    """
    return vm.status != VM_STATUS_DOWN


class CloudProvider(object):
    """Cloud provider for use with an oVirt engine.

    Only the instances capability is offered. Every instance operation
    fetches a fresh listing from the engine and answers from that single
    snapshot; nothing is kept between calls, so one provider can serve
    concurrent callers.
    """

    def __init__(self, provider_config, client):
        if not client.get_connection_details().url:
            raise ConfigurationError("oVirt engine url is empty")

        self.config = provider_config
        self.client = client
        self.directory = VMDirectory(client, provider_config.vms_query)

    def initialize(self, client_builder):
        """Accept the cluster client builder; the provider needs none."""

    def provider_name(self):
        """Return the cloud provider ID."""
        return PROVIDER_NAME

    #================================================================
    # Capabilities

    def instances(self):
        return Capability(self, True)

    def load_balancer(self):
        return UNSUPPORTED

    def zones(self):
        return UNSUPPORTED

    def clusters(self):
        return UNSUPPORTED

    def routes(self):
        return UNSUPPORTED

    def has_cluster_id(self):
        """Return True if a cluster ID is required and set."""
        return False

    def scrub_dns(self, nameservers, searches):
        """Leave pod DNS settings alone."""
        return None, None

    def add_ssh_key_to_all_instances(self, user, key_data):
        log.warning("Adding SSH keys to instances is not supported")
        return fail(Unimplemented("add_ssh_key_to_all_instances"))

    #================================================================
    # Instances

    def _get_vms(self):
        d = self.directory.fetch()
        d.addCallback(index_by_name)
        return d

    @inlineCallbacks
    def node_addresses(self, name):
        """Return the addresses of the VM backing node `name`.

        :return: list of :class:`ovirt_cloud.address.NodeAddress`, in the
            order the engine reports them; empty for a VM without nics.
        :rtype: :class:`twisted.internet.defer.Deferred`

        :raises: :exc:`ovirt_cloud.errors.InstanceNotFound`
        """
        vms = yield self._get_vms()
        vm = vms.get(name)
        if vm is None or not vm.vm_id:
            raise InstanceNotFound(name=name)
        return extract_node_addresses(vm)

    def node_addresses_by_provider_id(self, provider_id):
        return fail(Unimplemented("node_addresses_by_provider_id"))

    @inlineCallbacks
    def instance_id(self, node_name):
        """Return the provider id of the VM backing `node_name`.

        Unlike :meth:`node_addresses`, a name with no VM behind it is not an
        error: the result is the empty string, which callers must treat as
        "no such instance". Failures to list VMs are still raised.
        """
        vms = yield self._get_vms()
        vm = vms.get(node_name)
        if vm is None:
            return ""
        return vm.vm_id

    def external_id(self, node_name):
        """Return the cloud provider ID of the node with the given name.

        Same lookup, and same empty string for unknown names, as
        :meth:`instance_id`.
        """
        return self.instance_id(node_name)

    def current_node_name(self, hostname):
        """Node names are the VM names, which are the hostnames."""
        return succeed(hostname)

    @inlineCallbacks
    def instance_exists_by_provider_id(self, provider_id):
        """Tell whether the instance with `provider_id` still exists.

        If False is returned, the instance is about to be deleted from the
        cluster, so that only happens for a VM that was found and is down.

        :raises: :exc:`ovirt_cloud.errors.InstanceNotFound` when no VM
            carries `provider_id`.
        """
        vms = yield self.directory.fetch()
        for vm in vms:
            if vm.vm_id and vm.vm_id == provider_id:
                return vm_exists(vm)
        raise InstanceNotFound(instance_id=provider_id)

    def instance_shutdown_by_provider_id(self, provider_id):
        """The provider never reports an instance as shut down."""
        return succeed(False)

    def instance_type(self, name):
        return succeed(PROVIDER_NAME)

    def instance_type_by_provider_id(self, provider_id):
        return fail(Unimplemented("instance_type_by_provider_id"))
