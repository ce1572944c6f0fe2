from __future__ import annotations

from typing import Any, Dict

from webapp_smoke.clients import AwsClients, collect
from webapp_smoke.config import DeploymentContext
from webapp_smoke.lookup import PropertyCheck, ResourceLookup, checked_lookup, evaluate, guarded
from webapp_smoke.results import ResultLog

TITLE = "COGNITO AUTHENTICATION"

PAGE_SIZE = 60

LAMBDA_TRIGGERS = (
    "PreSignUp",
    "PostConfirmation",
    "PreAuthentication",
    "PostAuthentication",
    "CustomMessage",
)


def _trigger_count(pool: Dict[str, Any]) -> int:
    config = pool.get("LambdaConfig") or {}
    return sum(1 for trigger in LAMBDA_TRIGGERS if config.get(trigger))


def _password_policy(pool: Dict[str, Any]) -> Dict[str, Any]:
    return (pool.get("Policies") or {}).get("PasswordPolicy") or {}


def _flag(value: Any) -> str:
    return str(bool(value)).lower()


POOL_PROPERTIES = (
    PropertyCheck(
        holds=lambda pool: bool(pool.get("MfaConfiguration")),
        passed=lambda pool: f"MFA configuration: {pool['MfaConfiguration']}",
    ),
    PropertyCheck(
        holds=lambda pool: bool(_password_policy(pool)),
        passed=lambda pool: (
            f"Password policy: min length {_password_policy(pool).get('MinimumLength', 0)}, "
            f"require numbers={_flag(_password_policy(pool).get('RequireNumbers'))}, "
            f"symbols={_flag(_password_policy(pool).get('RequireSymbols'))}"
        ),
    ),
    PropertyCheck(
        holds=lambda pool: bool((pool.get("EmailConfiguration") or {}).get("EmailSendingAccount")),
        passed=lambda pool: f"Email sending: {pool['EmailConfiguration']['EmailSendingAccount']}",
    ),
    PropertyCheck(
        holds=lambda pool: _trigger_count(pool) > 0,
        passed=lambda pool: f"Lambda triggers: {_trigger_count(pool)} configured",
    ),
    PropertyCheck(
        holds=lambda pool: True,
        passed=lambda pool: f"Estimated users: {pool.get('EstimatedNumberOfUsers', 0)}",
    ),
)

CLIENT_PROPERTIES = (
    PropertyCheck(
        holds=lambda client: bool(client.get("AllowedOAuthFlows")),
        passed=lambda client: f"  OAuth flows: {client['AllowedOAuthFlows']}",
    ),
    PropertyCheck(
        holds=lambda client: bool(client.get("AllowedOAuthScopes")),
        passed=lambda client: f"  OAuth scopes: {client['AllowedOAuthScopes']}",
    ),
    PropertyCheck(
        holds=lambda client: bool(client.get("ExplicitAuthFlows")),
        passed=lambda client: f"  Auth flows: {client['ExplicitAuthFlows']}",
    ),
)


def check(clients: AwsClients, context: DeploymentContext) -> ResultLog:
    log = ResultLog(domain=TITLE)
    cognito = clients.cognito
    pool_name = context.resource_name("userpool")

    pool = checked_lookup(
        log,
        ResourceLookup(
            name="User Pool",
            label="List user pools",
            query=lambda: collect(
                cognito, "list_user_pools", "UserPools", PaginationConfig={"PageSize": PAGE_SIZE}
            ),
            match=lambda candidate: candidate.get("Name") == pool_name,
            found=lambda found: f"User Pool '{pool_name}' exists (ID: {found['Id']})",
            missing=f"User Pool '{pool_name}' not found",
        ),
    )
    if pool is None:
        return log
    pool_id = pool["Id"]

    details = guarded(
        log, "User Pool", "Describe user pool",
        lambda: cognito.describe_user_pool(UserPoolId=pool_id)["UserPool"],
    )
    if details is not None:
        evaluate(log, "User Pool", details, POOL_PROPERTIES)

    app_clients = guarded(
        log, "User Pool Clients", "List user pool clients",
        lambda: collect(
            cognito, "list_user_pool_clients", "UserPoolClients",
            UserPoolId=pool_id, PaginationConfig={"PageSize": PAGE_SIZE},
        ),
    )
    if app_clients is None:
        return log
    if not app_clients:
        log.fail("User Pool Clients", "No User Pool clients found")
        return log

    for summary in app_clients:
        client = guarded(
            log, "User Pool Clients", f"Describe client '{summary.get('ClientId')}'",
            lambda: cognito.describe_user_pool_client(
                UserPoolId=pool_id, ClientId=summary["ClientId"]
            )["UserPoolClient"],
            outcome=None,
        )
        if client is None:
            continue
        log.ok("User Pool Clients", f"Client '{client.get('ClientName')}' (ID: {client.get('ClientId')})")
        evaluate(log, "User Pool Clients", client, CLIENT_PROPERTIES)

    return log
