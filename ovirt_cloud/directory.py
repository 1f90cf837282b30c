"""Listing of the virtual machines visible to the provider."""

import logging

from twisted.internet.defer import maybeDeferred

from ovirt_cloud.utils import convert_unknown_error


DEFAULT_VM_SEARCH_QUERY = "vms?follow=nics&search="

log = logging.getLogger("ovirt_cloud.directory")


class VMDirectory(object):
    """Fetches the current set of virtual machines from the engine.

    The search query is composed once, from the fixed collection query and
    the operator supplied filter. The filter is passed through unchecked.
    Nothing is cached: every :meth:`fetch` goes back to the engine.
    """

    def __init__(self, client, vms_filter=""):
        self.client = client
        self.query = DEFAULT_VM_SEARCH_QUERY + (vms_filter or "")

    def fetch(self):
        """List the virtual machines matching the search query.

        :return: a list of :class:`ovirt_cloud.vm.VirtualMachine`
        :rtype: :class:`twisted.internet.defer.Deferred`

        :raises: :exc:`ovirt_cloud.errors.BackendUnavailable`
        """
        d = maybeDeferred(self.client.get_vms, self.query)
        d.addCallback(self._fetched)
        d.addErrback(convert_unknown_error)
        return d

    def _fetched(self, vms):
        vms = list(vms)
        log.debug("Found %d VMs for %r", len(vms), self.query)
        return vms


def index_by_name(vms):
    """Map VM names to VMs; a later duplicate name replaces an earlier one.

    VMs listed without a name cannot be looked up and are left out.
    """
    index = {}
    for vm in vms:
        if not vm.name:
            log.debug("Skipping VM %s, which has no name", vm.vm_id)
            continue
        if vm.name in index:
            log.debug(
                "VM name %r is shared by %s and %s, keeping the latter",
                vm.name, index[vm.name].vm_id, vm.vm_id)
        index[vm.name] = vm
    return index
