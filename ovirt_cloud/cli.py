"""ovirt-cloud-provider command line interface.

Resolves nodes the way the cluster controller would, which helps when
checking a configuration and its VM filter against a live engine.
"""

import argparse
import logging
import sys

from twisted.internet.defer import inlineCallbacks, maybeDeferred
from twisted.internet.task import react
from twisted.python.failure import Failure
import yaml

from ovirt_cloud.bootstrap import create_provider
from ovirt_cloud.config import DEFAULT_CONFIG_PATH


log = logging.getLogger("ovirt_cloud.cli")


@inlineCallbacks
def addresses(provider, options):
    """List the addresses of a node."""
    node_addresses = yield provider.node_addresses(options.name)
    return [{"address": address.address, "type": address.type}
            for address in node_addresses]


@inlineCallbacks
def instance_id(provider, options):
    """Show the provider id of a node."""
    vm_id = yield provider.instance_id(options.name)
    return {"name": options.name, "instance-id": vm_id}


@inlineCallbacks
def exists(provider, options):
    """Tell whether an instance still exists."""
    found = yield provider.instance_exists_by_provider_id(options.provider_id)
    return {"instance-id": options.provider_id, "exists": found}


def setup_parser(**kw):
    """Setup a command line argument/option parser."""
    parser = argparse.ArgumentParser(
        prog="ovirt-cloud-provider",
        description="Resolve cluster nodes against an oVirt engine", **kw)
    parser.add_argument(
        "--config", "-c", default=DEFAULT_CONFIG_PATH,
        help="Provider configuration file (default: %(default)s)")
    parser.add_argument(
        "--verbose", "-v", default=False,
        action="store_true",
        help="Enable verbose logging")
    parser.add_argument(
        "--log-file", "-l", default=sys.stderr, type=argparse.FileType("a"),
        help="Log output to file")

    subparsers = parser.add_subparsers(dest="subcommand")
    subparsers.required = True

    sub_parser = subparsers.add_parser("addresses", help=addresses.__doc__)
    sub_parser.add_argument("name", help="Node (VM) name")
    sub_parser.set_defaults(command=addresses)

    sub_parser = subparsers.add_parser("instance-id", help=instance_id.__doc__)
    sub_parser.add_argument("name", help="Node (VM) name")
    sub_parser.set_defaults(command=instance_id)

    sub_parser = subparsers.add_parser("exists", help=exists.__doc__)
    sub_parser.add_argument("provider_id", metavar="PROVIDER_ID",
                            help="oVirt VM id")
    sub_parser.set_defaults(command=exists)

    return parser


def setup_logging(options):
    level = logging.DEBUG if options.verbose else logging.INFO
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        level=level,
        stream=options.log_file)


def load_provider(path):
    with open(path) as config:
        return create_provider(config)


def run(reactor, options, stream=None):
    """Run the selected command and print its result as YAML."""
    if stream is None:
        stream = sys.stdout

    def render(result):
        stream.write(yaml.safe_dump(result, default_flow_style=False))
        log.debug("%r command finished successfully", options.subcommand)

    def handle_failure(failure):
        if options.verbose:
            log.error(failure.getTraceback())
        log.error(failure.getErrorMessage())
        return Failure(SystemExit(1))

    d = maybeDeferred(load_provider, options.config)
    d.addCallback(options.command, options)
    d.addCallbacks(render, handle_failure)
    return d


def main(args=None):
    """The ovirt-cloud-provider console script entry point."""
    parser = setup_parser()
    options = parser.parse_args(args)
    setup_logging(options)
    react(run, (options,))
