from __future__ import annotations

import unittest

from aws_fakes import client_error, conforming_clients, make_context
from webapp_smoke.checks import functions
from webapp_smoke.results import Outcome


class TestFunctionsChecks(unittest.TestCase):
    def setUp(self) -> None:
        self.clients = conforming_clients()
        self.context = make_context()

    def test_conforming_functions_pass(self) -> None:
        log = functions.check(self.clients, self.context)
        self.assertEqual((log.failed, log.warned), (0, 0))
        self.assertEqual(
            [r.message for r in log.results],
            [
                "Lambda 'acme-prod-webapp-user' (provided.al2023, 512MB, Active)",
                "  VPC configured: 2 subnets",
                "Layer 'acme-prod-webapp-shared' (latest version: 3)",
            ],
        )

    def test_listing_error_fails_once(self) -> None:
        self.clients.lambda_.paginators["list_functions"].paginate.side_effect = client_error(
            "AccessDeniedException"
        )
        log = functions.check(self.clients, self.context)
        self.assertEqual((log.total, log.failed), (1, 1))

    def test_no_matching_functions_is_a_warning(self) -> None:
        self.clients.lambda_.paginators["list_functions"].paginate.return_value = [
            {"Functions": [{"FunctionName": "unrelated", "Runtime": "python3.12", "MemorySize": 128}]}
        ]
        log = functions.check(self.clients, self.context)
        self.assertEqual(log.failed, 0)
        self.assertEqual(
            [r.message for r in log.by_outcome(Outcome.WARNING)],
            ["No Lambda functions found with prefix 'acme-prod-webapp'"],
        )

    def test_shared_base_api_layer_counts(self) -> None:
        self.clients.lambda_.paginators["list_layers"].paginate.return_value = [
            {"Layers": [{"LayerName": "base-api-java", "LatestMatchingVersion": {"Version": 9}}]}
        ]
        log = functions.check(self.clients, self.context)
        self.assertIn("Layer 'base-api-java' (latest version: 9)", [r.message for r in log.results])

    def test_missing_or_unreadable_layers_are_warnings(self) -> None:
        self.clients.lambda_.paginators["list_layers"].paginate.return_value = [{"Layers": []}]
        log = functions.check(self.clients, self.context)
        self.assertEqual([r.message for r in log.by_outcome(Outcome.WARNING)], ["No webapp-related layers found"])

        self.clients.lambda_.paginators["list_layers"].paginate.side_effect = client_error("AccessDeniedException")
        log = functions.check(self.clients, self.context)
        self.assertEqual((log.failed, log.warned), (0, 1))


if __name__ == "__main__":
    unittest.main()
