from __future__ import annotations

import unittest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError, EndpointConnectionError

from aws_fakes import client_error
from webapp_smoke.lookup import (
    PropertyCheck,
    ResourceLookup,
    absent_on,
    checked_lookup,
    guarded,
    locate,
)
from webapp_smoke.results import Outcome, ResultLog


def _lookup(query, properties=(), missing_outcome=Outcome.FAILED) -> ResourceLookup:
    return ResourceLookup(
        name="Widget",
        label="List widgets",
        query=query,
        match=lambda candidate: candidate.get("Name") == "acme-prod-webapp-widget",
        found=lambda found: f"Widget exists (ID: {found['Id']})",
        missing="Widget not found",
        missing_outcome=missing_outcome,
        properties=properties,
    )


class TestCheckedLookup(unittest.TestCase):
    def test_found_resource_records_pass_and_properties(self) -> None:
        log = ResultLog()
        properties = (
            PropertyCheck(
                holds=lambda r: r["Enabled"],
                passed=lambda r: "enabled",
                otherwise=lambda r: "disabled",
            ),
            PropertyCheck(
                holds=lambda r: r["Encrypted"],
                passed=lambda r: "encrypted",
                otherwise=lambda r: "not encrypted",
            ),
            PropertyCheck(holds=lambda r: bool(r["Tags"]), passed=lambda r: "tagged"),
        )
        resource = checked_lookup(log, _lookup(
            lambda: [
                {"Name": "acme-prod-webapp-widget-old", "Id": "w-0"},
                {"Name": "acme-prod-webapp-widget", "Id": "w-1", "Enabled": True, "Encrypted": False, "Tags": []},
            ],
            properties=properties,
        ))

        self.assertEqual(resource["Id"], "w-1")
        self.assertEqual(
            [(r.outcome, r.message) for r in log.results],
            [
                (Outcome.PASSED, "Widget exists (ID: w-1)"),
                (Outcome.PASSED, "enabled"),
                (Outcome.WARNING, "not encrypted"),
            ],
        )

    def test_name_match_is_exact(self) -> None:
        log = ResultLog()
        resource = checked_lookup(log, _lookup(lambda: [{"Name": "acme-prod-webapp-widget-2", "Id": "w-2"}]))
        self.assertIsNone(resource)
        self.assertEqual(log.failed, 1)
        self.assertEqual(log.results[0].message, "Widget not found")

    def test_missing_resource_skips_properties(self) -> None:
        log = ResultLog()
        holds = MagicMock(return_value=True)
        checked_lookup(log, _lookup(lambda: [], properties=(PropertyCheck(holds=holds, passed=lambda r: "x"),)))
        holds.assert_not_called()
        self.assertEqual(log.total, 1)

    def test_missing_outcome_can_be_soft(self) -> None:
        log = ResultLog()
        checked_lookup(log, _lookup(lambda: [], missing_outcome=Outcome.WARNING))
        self.assertEqual((log.failed, log.warned), (0, 1))

    def test_query_error_records_single_failure(self) -> None:
        log = ResultLog()

        def query():
            raise client_error("AccessDeniedException", "ListWidgets")

        self.assertIsNone(checked_lookup(log, _lookup(query)))
        self.assertEqual(log.total, 1)
        self.assertEqual(log.results[0].outcome, Outcome.FAILED)
        self.assertTrue(log.results[0].message.startswith("List widgets: "))

    def test_transport_error_is_a_query_failure(self) -> None:
        log = ResultLog()

        def query():
            raise EndpointConnectionError(endpoint_url="https://widgets.us-east-1.amazonaws.com")

        checked_lookup(log, _lookup(query))
        self.assertEqual(log.failed, 1)

    def test_lookup_without_query_is_rejected(self) -> None:
        lookup = ResourceLookup(
            name="Widget",
            match=lambda candidate: True,
            found=lambda found: "Widget exists",
            missing="Widget not found",
        )
        with self.assertRaises(ValueError):
            checked_lookup(ResultLog(), lookup)

    def test_locate_needs_only_matching_fields(self) -> None:
        log = ResultLog()
        lookup = ResourceLookup(
            name="Widget",
            match=lambda candidate: candidate.get("Name") == "w",
            found=lambda found: "Widget exists",
            missing="Widget not found",
            missing_outcome=Outcome.WARNING,
        )
        self.assertEqual(locate(log, lookup, [{"Name": "w"}]), {"Name": "w"})
        self.assertIsNone(locate(log, lookup, []))
        self.assertEqual((log.passed, log.warned), (1, 1))


class TestAbsentOn(unittest.TestCase):
    def test_listed_code_means_no_candidates(self) -> None:
        def call():
            raise client_error("ResourceNotFoundException")

        self.assertEqual(absent_on(call, "ResourceNotFoundException"), [])

    def test_other_codes_propagate(self) -> None:
        def call():
            raise client_error("ThrottlingException")

        with self.assertRaises(ClientError):
            absent_on(call, "ResourceNotFoundException")

    def test_success_wraps_single_result(self) -> None:
        self.assertEqual(absent_on(lambda: {"Name": "t"}, "ResourceNotFoundException"), [{"Name": "t"}])


class TestGuarded(unittest.TestCase):
    def test_failure_recorded_at_requested_outcome(self) -> None:
        log = ResultLog()

        def call():
            raise client_error("AccessDenied")

        self.assertIsNone(guarded(log, "Authorizers", "Get authorizers", call, outcome=Outcome.WARNING))
        self.assertEqual((log.failed, log.warned), (0, 1))

    def test_outcome_none_records_nothing(self) -> None:
        log = ResultLog()

        def call():
            raise client_error("AccessDenied")

        self.assertIsNone(guarded(log, "VPC", "DNS lookup", call, outcome=None))
        self.assertEqual(log.total, 0)

    def test_success_returns_value(self) -> None:
        log = ResultLog()
        self.assertEqual(guarded(log, "VPC", "DNS lookup", lambda: 3), 3)
        self.assertEqual(log.total, 0)


if __name__ == "__main__":
    unittest.main()
