"""Test cases for ovirt_cloud.client"""

from base64 import b64encode

from twisted.internet.defer import CancelledError
from twisted.internet.error import ConnectionRefusedError, DNSLookupError
from twisted.python.failure import Failure
from twisted.web.client import ResponseNeverReceived

from ovirt_cloud.client import ConnectionDetails, OvirtClient
from ovirt_cloud.connection import InsecurePolicyForHTTPS
from ovirt_cloud.errors import BackendUnavailable
from ovirt_cloud.tests.testing import (
    DETAILS, FakeAgent, PendingAgent, TestCase)


QUERY = "vms?follow=nics&search=cluster=production"


class TestOvirtClient(TestCase):

    def get_client(self, agent=None, details=DETAILS):
        """Return an OvirtClient talking to a FakeAgent."""
        if agent is None:
            agent = FakeAgent()
        log = self.setup_agent(agent)
        return OvirtClient(details), agent, log

    def test_init_adds_trailing_slash(self):
        """
        The engine URL gets a trailing slash, so that API paths are joined
        below it rather than replacing its last element.
        """
        client = OvirtClient(DETAILS)
        self.assertEqual(DETAILS.url + "/", client.url)

    def test_init_leaves_trailing_slash_on_url(self):
        details = DETAILS._replace(url="https://engine/ovirt-engine/api/")
        client = OvirtClient(details)
        self.assertEqual("https://engine/ovirt-engine/api/", client.url)

    def test_get_connection_details(self):
        client = OvirtClient(DETAILS)
        self.assertEqual(DETAILS, client.get_connection_details())

    def test_connection_details_defaults(self):
        details = ConnectionDetails("https://engine", "user", "pass")
        self.assertFalse(details.insecure)
        self.assertEqual(None, details.ca_file)

    def test_get_url_quotes_search(self):
        """Spaces in the operator supplied search are percent-encoded."""
        client = OvirtClient(DETAILS)
        self.assertEqual(
            "https://engine.example.com/ovirt-engine/api/"
            "vms?follow=nics&search=name=node*%20and%20cluster=prod",
            client.get_url(
                "vms?follow=nics&search=name=node* and cluster=prod"))

    def test_get_vms(self):
        client, agent, log = self.get_client()
        vms = self.successResultOf(client.get_vms(QUERY))
        self.assertEqual(
            ["node1", "node2", "node3", "node4"], [vm.name for vm in vms])
        [(method, uri, headers)] = agent.requests
        self.assertEqual(b"GET", method)
        self.assertEqual(
            b"https://engine.example.com/ovirt-engine/api/" +
            QUERY.encode("ascii"), uri)

    def test_request_headers(self):
        """Requests carry basic auth credentials and ask for JSON."""
        client, agent, log = self.get_client()
        self.successResultOf(client.get_vms(QUERY))
        [(method, uri, headers)] = agent.requests
        token = b64encode(b"admin@internal:secret").decode("ascii")
        self.assertEqual(
            ["Basic %s" % token], headers.getRawHeaders("Authorization"))
        self.assertEqual(
            ["application/json"], headers.getRawHeaders("Accept"))
        self.assertEqual(["4"], headers.getRawHeaders("Version"))

    def test_agent_created_once(self):
        client, agent, log = self.get_client()
        self.successResultOf(client.get_vms(QUERY))
        self.successResultOf(client.get_vms(QUERY))
        self.assertEqual(1, len(log))
        self.assertEqual(2, len(agent.requests))

    def test_insecure_connection(self):
        client, agent, log = self.get_client(
            details=DETAILS._replace(insecure=True))
        self.successResultOf(client.get_vms(QUERY))
        self.assertTrue(isinstance(
            log[0].kwargs["contextFactory"], InsecurePolicyForHTTPS))

    def test_get_vms_empty_listing(self):
        client, agent, log = self.get_client(FakeAgent(body=b"{}"))
        self.assertEqual([], self.successResultOf(client.get_vms(QUERY)))

    def test_http_error_status(self):
        client, agent, log = self.get_client(
            FakeAgent(body=b"Unauthorized", code=401))
        failure = self.failureResultOf(
            client.get_vms(QUERY), BackendUnavailable)
        self.assertEqual(
            "oVirt API returned HTTP 401 for "
            "https://engine.example.com/ovirt-engine/api/" + QUERY,
            str(failure.value))

    def test_malformed_body(self):
        client, agent, log = self.get_client(FakeAgent(body=b"<html/>"))
        failure = self.failureResultOf(
            client.get_vms(QUERY), BackendUnavailable)
        self.assertIn(
            "Unexpected JSONDecodeError interacting with oVirt",
            str(failure.value))

    def test_unexpected_document(self):
        client, agent, log = self.get_client(FakeAgent(body=b"[]"))
        failure = self.failureResultOf(
            client.get_vms(QUERY), BackendUnavailable)
        self.assertIn("Unexpected AttributeError", str(failure.value))

    def test_transport_error(self):
        client, agent, log = self.get_client(
            FakeAgent(error=ConnectionRefusedError()))
        failure = self.failureResultOf(
            client.get_vms(QUERY), BackendUnavailable)
        self.assertIn(
            "Unexpected ConnectionRefusedError interacting with oVirt",
            str(failure.value))

    def test_cancel_get_vms(self):
        """
        Agent reports a cancelled request as `ResponseNeverReceived`; the
        caller still sees the cancellation, not a backend failure.
        """
        client, agent, log = self.get_client(PendingAgent())
        d = client.get_vms(QUERY)
        d.cancel()
        self.failureResultOf(d, CancelledError)
        self.assertTrue(agent.pending[0].called)

    def test_cancel_get_vms_while_connecting(self):
        """A cancel that lands before the connection is up is a cancel."""
        client, agent, log = self.get_client(
            PendingAgent(cancel_error=DNSLookupError))
        d = client.get_vms(QUERY)
        d.cancel()
        self.failureResultOf(d, CancelledError)

    def test_errors_without_cancel_are_converted(self):
        client, agent, log = self.get_client(PendingAgent())
        d = client.get_vms(QUERY)
        agent.pending[0].errback(
            ResponseNeverReceived([Failure(ConnectionRefusedError())]))
        failure = self.failureResultOf(d, BackendUnavailable)
        self.assertIn("Unexpected ResponseNeverReceived", str(failure.value))
