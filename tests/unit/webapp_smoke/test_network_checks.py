from __future__ import annotations

import unittest

from aws_fakes import client_error, conforming_clients, make_context
from webapp_smoke.checks import network
from webapp_smoke.results import Outcome


class TestNetworkChecks(unittest.TestCase):
    def setUp(self) -> None:
        self.clients = conforming_clients()
        self.context = make_context()

    def test_conforming_vpc_passes_every_check(self) -> None:
        log = network.check(self.clients, self.context)
        self.assertEqual((log.failed, log.warned), (0, 0))
        messages = [r.message for r in log.results]
        self.assertIn("VPC 'acme-prod-webapp-vpc' exists (CIDR: 10.0.0.0/16)", messages)
        self.assertIn("Subnets: 2 public, 2 private", messages)
        self.assertIn("NAT Gateways: 1 available", messages)
        self.clients.ec2.describe_vpcs.assert_called_once_with(
            Filters=[{"Name": "tag:Name", "Values": ["acme-prod-webapp-vpc"]}]
        )

    def test_query_error_fails_once_and_stops(self) -> None:
        self.clients.ec2.describe_vpcs.side_effect = client_error("UnauthorizedOperation", "DescribeVpcs")
        log = network.check(self.clients, self.context)
        self.assertEqual((log.total, log.failed), (1, 1))
        self.assertTrue(log.results[0].message.startswith("VPC lookup: "))
        self.clients.ec2.describe_subnets.assert_not_called()

    def test_missing_vpc_fails_once_and_stops(self) -> None:
        self.clients.ec2.describe_vpcs.return_value = {"Vpcs": []}
        log = network.check(self.clients, self.context)
        self.assertEqual((log.total, log.failed), (1, 1))
        self.assertEqual(log.results[0].message, "VPC 'acme-prod-webapp-vpc' not found")
        self.clients.ec2.describe_vpc_attribute.assert_not_called()

    def test_dns_hostnames_disabled_is_a_warning(self) -> None:
        self.clients.ec2.describe_vpc_attribute.side_effect = lambda VpcId, Attribute: {
            "enableDnsSupport": {"EnableDnsSupport": {"Value": True}},
            "enableDnsHostnames": {"EnableDnsHostnames": {"Value": False}},
        }[Attribute]
        log = network.check(self.clients, self.context)
        self.assertEqual(log.failed, 0)
        self.assertEqual([r.message for r in log.by_outcome(Outcome.WARNING)], ["DNS hostnames not enabled"])
        self.assertEqual(log.exit_code, 0)

    def test_unreadable_dns_attribute_is_a_warning(self) -> None:
        self.clients.ec2.describe_vpc_attribute.side_effect = client_error("UnauthorizedOperation")
        log = network.check(self.clients, self.context)
        self.assertEqual((log.failed, log.warned), (0, 2))

    def test_vpc_not_available_fails(self) -> None:
        self.clients.ec2.describe_vpcs.return_value["Vpcs"][0]["State"] = "pending"
        log = network.check(self.clients, self.context)
        self.assertEqual([r.message for r in log.by_outcome(Outcome.FAILED)], ["VPC state: pending"])

    def test_subnet_lookup_error_stops_domain(self) -> None:
        self.clients.ec2.describe_subnets.side_effect = client_error("RequestLimitExceeded")
        log = network.check(self.clients, self.context)
        self.assertEqual(log.failed, 1)
        self.assertEqual(log.results[-1].name, "Subnets")
        self.clients.ec2.describe_internet_gateways.assert_not_called()

    def test_missing_gateways_are_warnings(self) -> None:
        self.clients.ec2.describe_internet_gateways.return_value = {"InternetGateways": []}
        self.clients.ec2.describe_nat_gateways.return_value = {"NatGateways": []}
        log = network.check(self.clients, self.context)
        self.assertEqual(log.failed, 0)
        self.assertEqual(
            [r.message for r in log.by_outcome(Outcome.WARNING)],
            ["No Internet Gateway found", "No NAT Gateways found"],
        )


if __name__ == "__main__":
    unittest.main()
