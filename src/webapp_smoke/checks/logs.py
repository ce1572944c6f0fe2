from __future__ import annotations

from typing import Any, Dict, List

from webapp_smoke.clients import AwsClients, collect
from webapp_smoke.config import DeploymentContext
from webapp_smoke.lookup import ResourceLookup, checked_lookup, guarded
from webapp_smoke.results import Outcome, ResultLog

TITLE = "CLOUDWATCH LOGGING"

LOG_GROUP_SUFFIXES = ("apigw-logs",)


def retention(log_group: Dict[str, Any]) -> str:
    days = log_group.get("retentionInDays")
    if days is None:
        return "never expire"
    return f"{days} days"


def _log_groups(clients: AwsClients, prefix: str) -> List[Dict[str, Any]]:
    return collect(clients.logs, "describe_log_groups", "logGroups", logGroupNamePrefix=prefix)


def check(clients: AwsClients, context: DeploymentContext) -> ResultLog:
    log = ResultLog(domain=TITLE)

    for suffix in LOG_GROUP_SUFFIXES:
        group_name = context.resource_name(suffix)
        checked_lookup(
            log,
            ResourceLookup(
                name="Log Groups",
                label=f"Describe log group '{group_name}'",
                query=lambda: _log_groups(clients, group_name),
                match=lambda group: group.get("logGroupName") == group_name,
                found=lambda group: f"Log group '{group_name}' (retention: {retention(group)})",
                missing=f"Log group '{group_name}' not found",
                missing_outcome=Outcome.WARNING,
            ),
        )

    lambda_prefix = f"/aws/lambda/{context.prefix}"
    lambda_groups = guarded(
        log, "Lambda Log Groups", "List Lambda log groups",
        lambda: _log_groups(clients, lambda_prefix),
        outcome=Outcome.WARNING,
    )
    if lambda_groups:
        for group in lambda_groups:
            log.ok("Lambda Log Groups", f"Lambda logs: {group.get('logGroupName')}")
    elif lambda_groups is not None:
        log.warn("Lambda Log Groups", "No Lambda log groups found")

    return log
