"""Tests for ovirt_cloud.

These are Twisted trial test cases. Run them with ``trial ovirt_cloud``,
or with ``pytest``, which collects trial test cases as unittest ones.
"""
