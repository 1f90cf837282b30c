from twisted.internet.defer import CancelledError
from twisted.python.failure import Failure

from ovirt_cloud.errors import BackendUnavailable, OvirtCloudError


def convert_unknown_error(failure):
    """Report a foreign error from an oVirt call as L{BackendUnavailable}.

    C{failure} is either a L{Failure}, when used as an errback, or a bare
    exception caught by the caller. A Failure comes back as a Failure;
    an exception is raised. L{OvirtCloudError}s and L{CancelledError}
    keep their type.
    """
    if isinstance(failure, Failure):
        error = failure.value
    else:
        error = failure

    if not isinstance(error, (OvirtCloudError, CancelledError)):
        message = ("Unexpected %s interacting with oVirt: %s"
                   % (type(error).__name__, str(error)))
        error = BackendUnavailable(message)

    if isinstance(failure, Failure):
        return Failure(error)
    raise error
