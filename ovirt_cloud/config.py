import os

import yaml

from ovirt_cloud.client import ConnectionDetails
from ovirt_cloud.errors import ConfigurationError


DEFAULT_CONFIG_PATH = "/etc/ovirt/cloud-provider.yaml"

SAMPLE_CONFIG = """\
connection:
  url: https://engine.example.com/ovirt-engine/api
  username: admin@internal
  password: secret
  insecure: false
filters:
  vms-query: cluster=production
"""

_CONNECTION_KEYS = {"url", "username", "password", "insecure", "ca-file"}
_FILTER_KEYS = {"vms-query"}


class ProviderConfig(object):
    """The provider configuration: engine connection and VM filter."""

    def __init__(self):
        self._config = None
        self._loaded_path = None

    def load(self, path=None):
        """Load a provider configuration file.

        @param path: An optional configuration file path.
            Defaults to /etc/ovirt/cloud-provider.yaml

        This method will call the C{parse()} method with the content
        of the loaded file.
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH
        if not os.path.isfile(path):
            self._fail("File was not found", path)
        with open(path) as file:
            self.parse(file.read(), path)

    def parse(self, content, path=None):
        """Parse a provider configuration.

        @param content: The content to parse.
        @param path: An optional configuration file path, used
            when raising errors.

        @raise ConfigurationError: On any problem with the content.
        """
        if not isinstance(content, (str, bytes)):
            self._fail("Configuration must be a string", path, repr(content))

        try:
            config = yaml.safe_load(content)
        except yaml.YAMLError as error:
            self._fail(error, path=path, content=content)

        if not isinstance(config, dict):
            self._fail("Configuration must be a dictionary", path, content)

        connection = self._get_section(config, "connection", path)
        filters = self._get_section(config, "filters", path, optional=True)
        unknown = set(config) - {"connection", "filters"}
        if unknown:
            self._fail(
                "Unknown sections: %s" % ", ".join(sorted(unknown)), path)
        self._check_keys(connection, _CONNECTION_KEYS, "connection", path)
        self._check_keys(filters, _FILTER_KEYS, "filters", path)

        for key in ("username", "password"):
            if not isinstance(connection.get(key), str):
                self._fail("connection.%s must be a string" % key, path)
        for key in ("url", "ca-file"):
            value = connection.get(key)
            if value is not None and not isinstance(value, str):
                self._fail("connection.%s must be a string" % key, path)
        if not isinstance(connection.get("insecure", False), bool):
            self._fail("connection.insecure must be true or false", path)
        vms_query = filters.get("vms-query")
        if vms_query is not None and not isinstance(vms_query, str):
            self._fail("filters.vms-query must be a string", path)

        self._config = {"connection": connection, "filters": filters}
        self._loaded_path = path

    def _get_section(self, config, name, path, optional=False):
        section = config.get(name)
        if section is None:
            if optional:
                return {}
            self._fail("Missing section: %s" % name, path)
        if not isinstance(section, dict):
            self._fail("Section %s must be a dictionary" % name, path)
        return section

    def _check_keys(self, section, allowed, name, path):
        unknown = set(section) - allowed
        if unknown:
            self._fail("Unknown keys in %s: %s" % (
                name, ", ".join(sorted(unknown))), path)

    def _fail(self, error, path, content=None):
        if path is None:
            path_info = ""
        else:
            path_info = " %s:" % (path,)

        error = str(error)
        if content:
            error += ":\n%s" % content

        raise ConfigurationError(
            "Provider configuration error:%s %s" % (path_info, error))

    @property
    def loaded_path(self):
        return self._loaded_path

    @property
    def vms_query(self):
        """The operator supplied filter appended to the VM search query."""
        return self._config["filters"].get("vms-query") or ""

    @property
    def connection_details(self):
        connection = self._config["connection"]
        return ConnectionDetails(
            url=connection.get("url") or "",
            username=connection["username"],
            password=connection["password"],
            insecure=connection.get("insecure", False),
            ca_file=connection.get("ca-file"))
