from __future__ import annotations

from typing import Any, Dict

from webapp_smoke.clients import AwsClients, collect
from webapp_smoke.config import DeploymentContext
from webapp_smoke.lookup import guarded
from webapp_smoke.results import Outcome, ResultLog

TITLE = "LAMBDA FUNCTIONS"

SHARED_LAYER_MARKER = "base-api"


def _describe_function(function: Dict[str, Any]) -> str:
    state = function.get("State") or "Unknown"
    return (
        f"Lambda '{function['FunctionName']}' "
        f"({function.get('Runtime')}, {function.get('MemorySize')}MB, {state})"
    )


def _latest_version(layer: Dict[str, Any]) -> Any:
    return (layer.get("LatestMatchingVersion") or {}).get("Version")


def check(clients: AwsClients, context: DeploymentContext) -> ResultLog:
    log = ResultLog(domain=TITLE)
    prefix = context.prefix

    functions = guarded(
        log, "Functions", "List functions",
        lambda: collect(clients.lambda_, "list_functions", "Functions"),
    )
    if functions is None:
        return log

    matched = [fn for fn in functions if fn.get("FunctionName", "").startswith(prefix)]
    for function in matched:
        log.ok("Functions", _describe_function(function))
        subnet_ids = (function.get("VpcConfig") or {}).get("SubnetIds") or []
        if subnet_ids:
            log.ok("Functions", f"  VPC configured: {len(subnet_ids)} subnets")
    if not matched:
        log.warn("Functions", f"No Lambda functions found with prefix '{prefix}'")

    layers = guarded(
        log, "Layers", "List layers",
        lambda: collect(clients.lambda_, "list_layers", "Layers"),
        outcome=Outcome.WARNING,
    )
    if layers is None:
        return log

    related = [
        layer for layer in layers
        if SHARED_LAYER_MARKER in layer.get("LayerName", "") or prefix in layer.get("LayerName", "")
    ]
    for layer in related:
        log.ok("Layers", f"Layer '{layer['LayerName']}' (latest version: {_latest_version(layer)})")
    if not related:
        log.warn("Layers", "No webapp-related layers found")

    return log
