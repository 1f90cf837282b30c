"""
This file holds the errors raised by the oVirt cloud provider.
"""


class OvirtCloudError(Exception):
    """All errors in ovirt_cloud are subclasses of this.

    This error should not be raised by itself, though, since it means
    pretty much nothing.  It's useful mostly as something to catch instead.
    """


class ConfigurationError(OvirtCloudError):
    """Raised when the provider configuration is missing or unusable."""


class ProviderError(OvirtCloudError):
    """Raised when an exception occurs talking to the oVirt engine."""


class BackendUnavailable(ProviderError):
    """Raised when the list of virtual machines could not be fetched."""


class InstanceNotFound(ProviderError):
    """Raised when no virtual machine matches a node name or instance id.

    @ivar name: the node name that was looked up, if any.
    @ivar instance_id: the provider id that was looked up, if any.
    """

    def __init__(self, name=None, instance_id=None):
        super(InstanceNotFound, self).__init__(name, instance_id)
        self.name = name
        self.instance_id = instance_id

    def __str__(self):
        if self.instance_id is not None:
            return "There is no instance with ID %s" % (self.instance_id,)
        return (
            "VM by the name %s does not exist. The VM may have been "
            "removed, or the search query criteria needs correction" % (
                self.name,))


class Unimplemented(OvirtCloudError):
    """Raised by operations the provider deliberately does not offer."""

    def __init__(self, operation):
        super(Unimplemented, self).__init__(operation)
        self.operation = operation

    def __str__(self):
        return "%s is not implemented by this provider" % self.operation
