from __future__ import annotations

from webapp_smoke.clients import AwsClients
from webapp_smoke.config import DeploymentContext
from webapp_smoke.lookup import (
    PropertyCheck,
    ResourceLookup,
    absent_on,
    checked_lookup,
    evaluate,
    guarded,
)
from webapp_smoke.results import ResultLog

TITLE = "DYNAMODB DATABASE"

TABLE_STATUS = PropertyCheck(
    holds=lambda table: table.get("TableStatus") == "ACTIVE",
    passed=lambda table: "Table status: ACTIVE",
    otherwise=lambda table: f"Table status: {table.get('TableStatus')}",
)

TABLE_PROPERTIES = (
    PropertyCheck(
        holds=lambda table: bool(table.get("BillingModeSummary")),
        passed=lambda table: f"Billing mode: {table['BillingModeSummary'].get('BillingMode')}",
    ),
    PropertyCheck(
        holds=lambda table: bool(table.get("SSEDescription")),
        passed=lambda table: (
            f"Encryption: {table['SSEDescription'].get('Status')} "
            f"({table['SSEDescription'].get('SSEType')})"
        ),
    ),
    PropertyCheck(
        holds=lambda table: bool(table.get("DeletionProtectionEnabled")),
        passed=lambda table: "Deletion protection: enabled",
        otherwise=lambda table: "Deletion protection: disabled",
    ),
    PropertyCheck(
        holds=lambda table: True,
        passed=lambda table: f"Item count: {table.get('ItemCount', 0)}",
    ),
)


def check(clients: AwsClients, context: DeploymentContext) -> ResultLog:
    log = ResultLog(domain=TITLE)
    dynamodb = clients.dynamodb
    table_name = context.resource_name("db-user")

    table = checked_lookup(
        log,
        ResourceLookup(
            name="User Table",
            label=f"Describe table '{table_name}'",
            query=lambda: absent_on(
                lambda: dynamodb.describe_table(TableName=table_name)["Table"],
                "ResourceNotFoundException",
            ),
            match=lambda candidate: candidate.get("TableName") == table_name,
            found=lambda found: f"Table '{table_name}' exists",
            missing=f"Table '{table_name}' not found",
            properties=(TABLE_STATUS,),
        ),
    )
    if table is None:
        return log

    for key in table.get("KeySchema", []):
        log.ok("User Table", f"Key: {key.get('AttributeName')} ({key.get('KeyType')})")
    evaluate(log, "User Table", table, TABLE_PROPERTIES)

    insights = guarded(
        log, "User Table", "Describe contributor insights",
        lambda: dynamodb.describe_contributor_insights(TableName=table_name),
        outcome=None,
    )
    if insights is not None:
        log.ok("User Table", f"Contributor insights: {insights.get('ContributorInsightsStatus')}")

    return log
