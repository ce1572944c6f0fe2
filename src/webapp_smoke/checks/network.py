from __future__ import annotations

from typing import Any, Dict, List

from webapp_smoke.clients import AwsClients
from webapp_smoke.config import DeploymentContext
from webapp_smoke.lookup import PropertyCheck, ResourceLookup, checked_lookup, guarded
from webapp_smoke.results import Outcome, ResultLog

TITLE = "VPC AND NETWORKING"

SUBNET_TYPE_TAG = "aws-cdk:subnet-type"


def _name_tag(vpc: Dict[str, Any]) -> str:
    for tag in vpc.get("Tags", []):
        if tag.get("Key") == "Name":
            return tag.get("Value", "")
    return ""


def _dns_attribute(clients: AwsClients, vpc_id: str, attribute: str, key: str) -> bool:
    response = clients.ec2.describe_vpc_attribute(VpcId=vpc_id, Attribute=attribute)
    return bool(response.get(key, {}).get("Value"))


def _count_subnets(subnets: List[Dict[str, Any]]) -> Dict[str, int]:
    counts = {"public": 0, "private": 0}
    for subnet in subnets:
        for tag in subnet.get("Tags", []):
            if tag.get("Key") != SUBNET_TYPE_TAG:
                continue
            if tag.get("Value") == "Public":
                counts["public"] += 1
            elif "Private" in tag.get("Value", ""):
                counts["private"] += 1
    return counts


def check(clients: AwsClients, context: DeploymentContext) -> ResultLog:
    log = ResultLog(domain=TITLE)
    vpc_name = context.resource_name("vpc")

    vpc = checked_lookup(
        log,
        ResourceLookup(
            name="VPC",
            label="VPC lookup",
            query=lambda: clients.ec2.describe_vpcs(
                Filters=[{"Name": "tag:Name", "Values": [vpc_name]}]
            ).get("Vpcs", []),
            match=lambda candidate: _name_tag(candidate) == vpc_name,
            found=lambda found: f"VPC '{vpc_name}' exists (CIDR: {found.get('CidrBlock')})",
            missing=f"VPC '{vpc_name}' not found",
            properties=(
                PropertyCheck(
                    holds=lambda found: found.get("State") == "available",
                    passed=lambda found: "VPC state: available",
                    otherwise=lambda found: f"VPC state: {found.get('State')}",
                    severity=Outcome.FAILED,
                ),
            ),
        ),
    )
    if vpc is None:
        return log
    vpc_id = vpc["VpcId"]

    dns_support = guarded(
        log, "VPC", "DNS support lookup",
        lambda: _dns_attribute(clients, vpc_id, "enableDnsSupport", "EnableDnsSupport"),
        outcome=None,
    )
    if dns_support:
        log.ok("VPC", "DNS support enabled")
    else:
        log.warn("VPC", "DNS support not enabled")

    dns_hostnames = guarded(
        log, "VPC", "DNS hostnames lookup",
        lambda: _dns_attribute(clients, vpc_id, "enableDnsHostnames", "EnableDnsHostnames"),
        outcome=None,
    )
    if dns_hostnames:
        log.ok("VPC", "DNS hostnames enabled")
    else:
        log.warn("VPC", "DNS hostnames not enabled")

    subnets = guarded(
        log, "Subnets", "Subnet lookup",
        lambda: clients.ec2.describe_subnets(
            Filters=[{"Name": "vpc-id", "Values": [vpc_id]}]
        ).get("Subnets", []),
    )
    if subnets is None:
        return log
    counts = _count_subnets(subnets)
    log.ok("Subnets", f"Subnets: {counts['public']} public, {counts['private']} private")

    igws = guarded(
        log, "Internet Gateway", "Internet gateway lookup",
        lambda: clients.ec2.describe_internet_gateways(
            Filters=[{"Name": "attachment.vpc-id", "Values": [vpc_id]}]
        ).get("InternetGateways", []),
        outcome=None,
    )
    if igws:
        log.ok("Internet Gateway", "Internet Gateway attached")
    else:
        log.warn("Internet Gateway", "No Internet Gateway found")

    nat_gateways = guarded(
        log, "NAT Gateways", "NAT gateway lookup",
        lambda: clients.ec2.describe_nat_gateways(
            Filter=[
                {"Name": "vpc-id", "Values": [vpc_id]},
                {"Name": "state", "Values": ["available"]},
            ]
        ).get("NatGateways", []),
        outcome=None,
    )
    if nat_gateways:
        log.ok("NAT Gateways", f"NAT Gateways: {len(nat_gateways)} available")
    else:
        log.warn("NAT Gateways", "No NAT Gateways found")

    return log
