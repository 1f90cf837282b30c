"""Construction and registration of the oVirt cloud provider."""

import logging

from ovirt_cloud.client import OvirtClient
from ovirt_cloud.config import ProviderConfig
from ovirt_cloud.errors import ConfigurationError
from ovirt_cloud.provider import CloudProvider, PROVIDER_NAME


log = logging.getLogger("ovirt_cloud.bootstrap")


def create_provider(config):
    """Build a :class:`CloudProvider` from a configuration stream.

    :param config: a file-like object holding the YAML configuration.
    :raises: :exc:`ovirt_cloud.errors.ConfigurationError`
    """
    if config is None:
        raise ConfigurationError(
            "missing configuration file for ovirt cloud provider")

    provider_config = ProviderConfig()
    provider_config.parse(config.read(), getattr(config, "name", None))
    client = OvirtClient(provider_config.connection_details)
    return CloudProvider(provider_config, client)


def register(registry):
    """Register the oVirt cloud provider into `registry`."""
    log.info("about to register the ovirt cloud provider to the cluster")
    registry.register(PROVIDER_NAME, create_provider)
