from __future__ import annotations

from webapp_smoke.clients import AwsClients, collect
from webapp_smoke.config import DeploymentContext
from webapp_smoke.lookup import PropertyCheck, ResourceLookup, checked_lookup, evaluate, guarded
from webapp_smoke.results import Outcome, ResultLog

TITLE = "API GATEWAY"

STAGE_PROPERTIES = (
    PropertyCheck(
        holds=lambda stage: bool(stage.get("tracingEnabled")),
        passed=lambda stage: "  X-Ray tracing enabled",
    ),
    PropertyCheck(
        holds=lambda stage: bool(stage.get("cacheClusterEnabled")),
        passed=lambda stage: f"  Caching enabled (size: {stage.get('cacheClusterSize')})",
    ),
)


def check(clients: AwsClients, context: DeploymentContext) -> ResultLog:
    log = ResultLog(domain=TITLE)
    apigateway = clients.apigateway
    api_name = context.resource_name("api")

    api = checked_lookup(
        log,
        ResourceLookup(
            name="REST API",
            label="List REST APIs",
            query=lambda: collect(apigateway, "get_rest_apis", "items"),
            match=lambda candidate: candidate.get("name") == api_name,
            found=lambda found: f"REST API '{api_name}' exists (ID: {found['id']})",
            missing=f"REST API '{api_name}' not found",
        ),
    )
    if api is None:
        return log
    api_id = api["id"]

    stages = guarded(
        log, "API Stages", "Get stages",
        lambda: apigateway.get_stages(restApiId=api_id).get("item", []),
    )
    for stage in stages or []:
        log.ok("API Stages", f"Stage '{stage.get('stageName')}' deployed")
        evaluate(log, "API Stages", stage, STAGE_PROPERTIES)

    resources = guarded(
        log, "API Resources", "Get resources",
        lambda: collect(apigateway, "get_resources", "items", restApiId=api_id),
    )
    if resources is not None:
        method_count = 0
        for resource in resources:
            for method in resource.get("resourceMethods") or {}:
                method_count += 1
                log.ok("API Resources", f"  {method} {resource.get('path')}")
        if method_count == 0:
            log.warn("API Resources", "No API methods found")

    authorizers = guarded(
        log, "Authorizers", "Get authorizers",
        lambda: apigateway.get_authorizers(restApiId=api_id).get("items", []),
        outcome=Outcome.WARNING,
    )
    if authorizers:
        for authorizer in authorizers:
            log.ok("Authorizers", f"Authorizer '{authorizer.get('name')}' (type: {authorizer.get('type')})")
    elif authorizers is not None:
        log.warn("Authorizers", "No authorizers configured")

    return log
