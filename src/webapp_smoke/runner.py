from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Tuple

from webapp_smoke.checks import email, functions, gateway, identity, logs, network, storage, topics
from webapp_smoke.clients import AwsClients
from webapp_smoke.config import DeploymentContext
from webapp_smoke.logging_utils import log_json
from webapp_smoke.reporting import Reporter
from webapp_smoke.results import ResultLog

DomainCheck = Callable[[AwsClients, DeploymentContext], ResultLog]

DOMAIN_CHECKS: Tuple[Tuple[str, DomainCheck], ...] = (
    (network.TITLE, network.check),
    (email.TITLE, email.check),
    (identity.TITLE, identity.check),
    (storage.TITLE, storage.check),
    (gateway.TITLE, gateway.check),
    (functions.TITLE, functions.check),
    (topics.TITLE, topics.check),
    (logs.TITLE, logs.check),
)


def run_domain(title: str, domain_check: DomainCheck, clients: AwsClients, context: DeploymentContext) -> ResultLog:
    try:
        return domain_check(clients, context)
    except Exception as e:
        log_json("domain_check_aborted", level=logging.ERROR, domain=title, error=repr(e))
        aborted = ResultLog(domain=title)
        aborted.fail(title, f"Check aborted: {e}")
        return aborted


def run_all(
    clients: AwsClients,
    context: DeploymentContext,
    reporter: Optional[Reporter] = None,
    checks: Sequence[Tuple[str, DomainCheck]] = DOMAIN_CHECKS,
) -> ResultLog:
    reporter = reporter or Reporter()
    run_log = ResultLog()
    log_json("smoke_test_started", deployment_id=context.deployment_id, region=context.region)

    for title, domain_check in checks:
        reporter.domain(title)
        domain_log = run_domain(title, domain_check, clients, context)
        for result in domain_log.results:
            reporter.result(result)
        run_log.extend(domain_log)
        log_json(
            "domain_checked",
            domain=title,
            passed=domain_log.passed,
            failed=domain_log.failed,
            warned=domain_log.warned,
        )

    log_json("smoke_test_finished", passed=run_log.passed, failed=run_log.failed, warned=run_log.warned)
    return run_log
