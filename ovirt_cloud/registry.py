import logging


log = logging.getLogger("ovirt_cloud.registry")


class CloudProviderRegistry(object):
    """Cloud provider factories known to a host process, keyed by name.

    Nothing registers itself on import; the host's bootstrap code fills
    the registry explicitly, see :func:`ovirt_cloud.bootstrap.register`.
    """

    def __init__(self):
        self._factories = {}

    def register(self, name, factory):
        """Register `factory` as the way to build provider `name`.

        :param factory: a callable taking a configuration stream (or None)
            and returning a provider.
        """
        if not callable(factory):
            raise ValueError(
                "Cloud provider factory for %r must be a callable" % name)
        if name in self._factories:
            raise ValueError("Cloud provider %r was registered twice" % name)
        self._factories[name] = factory
        log.info("Registered cloud provider %r", name)

    def names(self):
        return sorted(self._factories)

    def get_provider(self, name, config):
        """Build provider `name` from the configuration stream `config`."""
        factory = self._factories.get(name)
        if factory is None:
            raise ValueError(
                "Unknown cloud provider %r (registered: %s)" % (
                    name, ", ".join(self.names()) or "none"))
        return factory(config)
