from twisted.internet.defer import CancelledError, fail
from twisted.python.failure import Failure

from ovirt_cloud.errors import BackendUnavailable, InstanceNotFound
from ovirt_cloud.tests.testing import TestCase
from ovirt_cloud.utils import convert_unknown_error


class ConvertUnknownErrorTest(TestCase):

    def test_convert_unknown_error(self):
        error = self.assertRaises(
            BackendUnavailable, convert_unknown_error, OSError("Bad"))
        self.assertEqual(
            str(error), "Unexpected OSError interacting with oVirt: Bad")

    def test_known_error_is_reraised(self):
        error = InstanceNotFound(name="node1")
        raised = self.assertRaises(
            InstanceNotFound, convert_unknown_error, error)
        self.assertIdentical(error, raised)

    def test_convert_unknown_error_with_failure(self):
        d = fail(ValueError("Bad"))
        d.addErrback(convert_unknown_error)
        failure = self.failureResultOf(d, BackendUnavailable)
        self.assertEqual(
            str(failure.value),
            "Unexpected ValueError interacting with oVirt: Bad")

    def test_cancellation_passes_through(self):
        result = convert_unknown_error(Failure(CancelledError()))
        self.assertTrue(result.check(CancelledError))

    def test_raised_cancellation_passes_through(self):
        self.assertRaises(
            CancelledError, convert_unknown_error, CancelledError())
