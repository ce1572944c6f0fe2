from __future__ import annotations

from typing import Any, Dict

from webapp_smoke.clients import AwsClients
from webapp_smoke.config import DeploymentContext
from webapp_smoke.lookup import (
    PropertyCheck,
    ResourceLookup,
    absent_on,
    checked_lookup,
    evaluate,
    guarded,
    locate,
)
from webapp_smoke.results import ResultLog

TITLE = "SES EMAIL SERVICE"


def _dkim_check(log: ResultLog, details: Dict[str, Any]) -> None:
    dkim = details.get("DkimAttributes")
    if not dkim:
        return
    status = dkim.get("Status")
    if status == "SUCCESS":
        log.ok("Email Identity", "DKIM: verified")
    elif status == "PENDING":
        log.warn("Email Identity", "DKIM: pending verification")
    else:
        log.warn("Email Identity", f"DKIM status: {status}")


def _check_identity(log: ResultLog, clients: AwsClients, context: DeploymentContext) -> bool:
    """Returns False when the identity listing itself failed."""
    domain = context.domain
    lookup = ResourceLookup(
        name="Email Identity",
        label="List email identities",
        query=lambda: clients.sesv2.list_email_identities().get("EmailIdentities", []),
        match=lambda candidate: candidate.get("IdentityName") == domain,
        found=lambda found: f"Email identity '{domain}' exists",
        missing=f"Email identity '{domain}' not found",
    )
    identities = guarded(log, lookup.name, lookup.label, lambda: list(lookup.query()))
    if identities is None:
        return False
    if locate(log, lookup, identities) is None:
        return True

    details = guarded(
        log, "Email Identity", "Get email identity",
        lambda: clients.sesv2.get_email_identity(EmailIdentity=domain),
        outcome=None,
    )
    if details is None:
        return True
    evaluate(log, "Email Identity", details, (
        PropertyCheck(
            holds=lambda found: bool(found.get("VerifiedForSendingStatus")),
            passed=lambda found: f"Email identity '{domain}' verified for sending",
            otherwise=lambda found: f"Email identity '{domain}' not verified for sending",
        ),
    ))
    _dkim_check(log, details)
    return True


def _check_configuration_set(log: ResultLog, clients: AwsClients, context: DeploymentContext) -> None:
    config_set_name = context.resource_name("configuration-set")
    config_set = checked_lookup(
        log,
        ResourceLookup(
            name="Configuration Sets",
            label=f"Get configuration set '{config_set_name}'",
            query=lambda: absent_on(
                lambda: clients.sesv2.get_configuration_set(ConfigurationSetName=config_set_name),
                "NotFoundException",
            ),
            match=lambda candidate: candidate.get("ConfigurationSetName", config_set_name) == config_set_name,
            found=lambda found: f"Configuration set '{config_set_name}' exists",
            missing=f"Configuration set '{config_set_name}' not found",
            properties=(
                PropertyCheck(
                    holds=lambda found: bool(found.get("ReputationOptions", {}).get("ReputationMetricsEnabled")),
                    passed=lambda found: "Reputation metrics enabled",
                    otherwise=lambda found: "Reputation metrics disabled",
                ),
                PropertyCheck(
                    holds=lambda found: bool(found.get("SendingOptions", {}).get("SendingEnabled")),
                    passed=lambda found: "Sending enabled",
                    otherwise=lambda found: "Sending disabled",
                ),
            ),
        ),
    )
    if config_set is None:
        return

    destinations = guarded(
        log, "Configuration Sets", "Get event destinations",
        lambda: clients.sesv2.get_configuration_set_event_destinations(
            ConfigurationSetName=config_set_name
        ).get("EventDestinations", []),
        outcome=None,
    )
    if destinations:
        log.ok("Configuration Sets", f"Event destinations configured: {len(destinations)}")
        for destination in destinations:
            log.ok(
                "Configuration Sets",
                f"  - {destination.get('Name')} (enabled: {str(bool(destination.get('Enabled'))).lower()})",
            )


def _check_bucket(log: ResultLog, clients: AwsClients, context: DeploymentContext) -> None:
    bucket_name = context.resource_name("ses-received-emails")
    head = guarded(
        log, "S3 Email Storage", "Head bucket",
        lambda: clients.s3.head_bucket(Bucket=bucket_name),
        outcome=None,
    )
    if head is None:
        log.warn("S3 Email Storage", f"S3 bucket '{bucket_name}' not accessible")
        return
    log.ok("S3 Email Storage", f"S3 bucket '{bucket_name}' exists")

    rules = guarded(
        log, "S3 Email Storage", "Get lifecycle configuration",
        lambda: absent_on(
            lambda: clients.s3.get_bucket_lifecycle_configuration(Bucket=bucket_name),
            "NoSuchLifecycleConfiguration",
        ),
        outcome=None,
    )
    rule_count = len(rules[0].get("Rules", [])) if rules else 0
    if rule_count:
        log.ok("S3 Email Storage", f"S3 lifecycle rules: {rule_count} configured")
    else:
        log.warn("S3 Email Storage", "S3 lifecycle rules: none configured")


def check(clients: AwsClients, context: DeploymentContext) -> ResultLog:
    log = ResultLog(domain=TITLE)
    if not _check_identity(log, clients, context):
        return log
    _check_configuration_set(log, clients, context)
    _check_bucket(log, clients, context)
    return log
