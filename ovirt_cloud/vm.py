"""Virtual machine records as reported by the oVirt engine."""

VM_STATUS_UP = "up"
VM_STATUS_DOWN = "down"
VM_STATUS_UNKNOWN = "unknown"
VM_STATUS_NOT_RESPONDING = "not_responding"


def _collection(d, outer, inner):
    """Return the list nested as ``d[outer][inner]``, or an empty list.

    The engine wraps every collection in an object named after it
    (``{"nics": {"nic": [...]}}``) and leaves either level out, or sets it
    to null, when the collection is empty.
    """
    wrapper = d.get(outer) or {}
    return wrapper.get(inner) or []


class IP(object):
    """One address assigned to a reported device."""

    def __init__(self, address, version=None):
        self.address = address
        self.version = version

    @classmethod
    def from_dict(cls, d):
        return cls(d.get("address", ""), d.get("version"))


class ReportedDevice(object):
    """A device the guest agent reports behind a nic."""

    def __init__(self, name=None, ips=()):
        self.name = name
        self.ips = tuple(ips)

    @classmethod
    def from_dict(cls, d):
        return cls(
            name=d.get("name"),
            ips=[IP.from_dict(ip) for ip in _collection(d, "ips", "ip")])


class Nic(object):
    """A network interface card attached to a virtual machine."""

    def __init__(self, name=None, devices=()):
        self.name = name
        self.devices = tuple(devices)

    @classmethod
    def from_dict(cls, d):
        devices = _collection(d, "reported_devices", "reported_device")
        return cls(
            name=d.get("name"),
            devices=[ReportedDevice.from_dict(dev) for dev in devices])


class VirtualMachine(object):
    """
    Representative of a virtual machine known to the oVirt engine.

    Instances are built fresh from every listing and are never modified
    afterwards. An empty `vm_id` is the "no such machine" sentinel and is
    never a valid identifier.
    """

    def __init__(self, vm_id, name, status=VM_STATUS_UNKNOWN, nics=()):
        self.vm_id = vm_id
        self.name = name
        self.status = status
        self.nics = tuple(nics)

    def __repr__(self):
        return "<VirtualMachine %s %r status=%s>" % (
            self.vm_id, self.name, self.status)

    @classmethod
    def from_dict(cls, d):
        """Convert a `dict` into a :class:`VirtualMachine`.

        :param dict d: a dict as returned (in a list) by
            :meth:`ovirt_cloud.client.OvirtClient.get_vms`
        :rtype: :class:`VirtualMachine`
        """
        return cls(
            vm_id=d.get("id") or "",
            name=d.get("name", ""),
            status=d.get("status") or VM_STATUS_UNKNOWN,
            nics=[Nic.from_dict(nic) for nic in _collection(d, "nics", "nic")])


def vms_from_json(data):
    """Decode a ``{"vm": [...]}`` listing into :class:`VirtualMachine` objects.

    The engine answers an empty search with an empty object.
    """
    return [VirtualMachine.from_dict(vm) for vm in data.get("vm") or []]
