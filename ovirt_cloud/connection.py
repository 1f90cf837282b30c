"""Authenticated HTTP connections to an oVirt engine."""

from base64 import b64encode

from twisted.internet import reactor
from twisted.internet.defer import CancelledError, Deferred
from twisted.internet.ssl import Certificate, CertificateOptions
from twisted.python.failure import Failure
from twisted.web.client import Agent, BrowserLikePolicyForHTTPS, readBody
from twisted.web.http_headers import Headers
from twisted.web.iweb import IPolicyForHTTPS
from zope.interface import implementer

from ovirt_cloud.errors import BackendUnavailable


DEFAULT_AGENT_FACTORY = Agent


@implementer(IPolicyForHTTPS)
class InsecurePolicyForHTTPS(object):
    """Accept whatever certificate the engine presents."""

    def creatorForNetloc(self, hostname, port):
        return CertificateOptions(verify=False)


def get_tls_policy(details):
    """Pick the HTTPS policy matching the connection details.

    A configured CA file becomes the only trust root; `insecure` turns
    verification off altogether; otherwise the platform trust store is used.
    """
    if details.insecure:
        return InsecurePolicyForHTTPS()
    if details.ca_file:
        with open(details.ca_file, "rb") as ca:
            trust_root = Certificate.loadPEM(ca.read())
        return BrowserLikePolicyForHTTPS(trustRoot=trust_root)
    return BrowserLikePolicyForHTTPS()


class OvirtConnection(object):
    """Helper class to provide a basic auth'd connection to the engine."""

    agent_factory = staticmethod(DEFAULT_AGENT_FACTORY)

    def __init__(self, details):
        self.details = details
        self._agent = None

    def get_agent(self):
        if self._agent is None:
            self._agent = self.agent_factory(
                reactor, contextFactory=get_tls_policy(self.details))
        return self._agent

    def get_headers(self):
        """Return the headers sent with every request.

        Credentials go out as HTTP Basic auth, and the engine is asked for
        version 4 JSON documents.
        """
        credentials = "%s:%s" % (self.details.username, self.details.password)
        token = b64encode(credentials.encode("utf-8")).decode("ascii")
        return Headers({
            "Authorization": ["Basic %s" % token],
            "Accept": ["application/json"],
            "Version": ["4"]})

    def dispatch_query(self, request_url, method="GET"):
        """Dispatch an authenticated request to L{request_url}.

        @param request_url: The URL to which the request is to be sent.
        @param method: The HTTP method, e.g. C{GET}.
        @return: A Deferred which fires with the response body as bytes,
            or fails with L{BackendUnavailable} on a non-2xx status.
            Cancelling it aborts the request and fails it with
            L{CancelledError}, whatever stage the request had reached.
        """
        cancelled = []

        def cancel(d):
            cancelled.append(True)
            request.cancel()

        def report_cancelled(failure):
            # Agent wraps a cancel in ResponseNeverReceived, or in a
            # connection error when it lands before the connection is up.
            if cancelled:
                return Failure(CancelledError())
            return failure

        result = Deferred(cancel)
        request = self.get_agent().request(
            method.encode("ascii"), request_url.encode("ascii"),
            self.get_headers(), None)
        request.addCallback(self._read_response, request_url)
        request.addErrback(report_cancelled)
        request.chainDeferred(result)
        return result

    def _read_response(self, response, request_url):
        d = readBody(response)
        if 200 <= response.code < 300:
            return d

        def raise_status(body):
            raise BackendUnavailable(
                "oVirt API returned HTTP %d for %s" % (
                    response.code, request_url))

        d.addCallback(raise_status)
        return d
