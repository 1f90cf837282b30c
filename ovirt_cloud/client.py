"""oVirt REST API client."""

from collections import namedtuple
import json
import logging
from urllib.parse import quote, urljoin

from ovirt_cloud.connection import OvirtConnection
from ovirt_cloud.utils import convert_unknown_error
from ovirt_cloud.vm import vms_from_json


log = logging.getLogger("ovirt_cloud.client")


ConnectionDetails = namedtuple(
    "ConnectionDetails",
    ("url", "username", "password", "insecure", "ca_file"),
    defaults=(False, None))


# Characters left alone when quoting a request URL; the search fragment is
# operator supplied and may contain spaces and other reserved characters.
_SAFE_URL_CHARACTERS = "!#$%&'()*+,/:;=?@[]~"


class OvirtClient(OvirtConnection):

    def __init__(self, details):
        """Initialise an API client for the oVirt engine.

        :param details: a :class:`ConnectionDetails`; `url` points at the
            engine API root, e.g. https://engine/ovirt-engine/api
        """
        super(OvirtClient, self).__init__(details)
        self.url = details.url
        if self.url and not self.url.endswith("/"):
            self.url += "/"

    def get_connection_details(self):
        return self.details

    def get_url(self, path):
        return quote(urljoin(self.url, path), safe=_SAFE_URL_CHARACTERS)

    def get(self, path):
        """Dispatch a C{GET} call to the engine.

        :param path: The API path, relative to the engine API root.
        :return: A Deferred which fires with the decoded JSON document.
        """
        url = self.get_url(path)
        log.debug("GET %s", url)
        d = self.dispatch_query(url)
        d.addCallback(json.loads)
        d.addErrback(convert_unknown_error)
        return d

    def get_vms(self, query):
        """Ask the engine for the virtual machines matching `query`.

        :param query: a collection path with search parameters, such as
            ``vms?follow=nics&search=cluster=prod``
        :return: A Deferred whose value is a list of
            :class:`ovirt_cloud.vm.VirtualMachine`.
        """
        d = self.get(query)
        d.addCallback(vms_from_json)
        d.addErrback(convert_unknown_error)
        return d
