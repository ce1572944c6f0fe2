#!/usr/bin/env python3
"""
Webapp smoke test: read-only infrastructure validation.

Checks that the resources a webapp deployment expects (VPC, SES, Cognito,
DynamoDB, API Gateway, Lambda, SNS, CloudWatch Logs) exist and are configured
as intended. Exits 1 if any check failed; warnings never fail the run.

Usage:
    DEPLOYMENT_ID=fastish-production webapp-smoke
    webapp-smoke --deployment-id fastish-production --domain fasti.sh --region us-west-2
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

import boto3
from botocore.exceptions import BotoCoreError

from webapp_smoke.clients import AwsClients
from webapp_smoke.config import (
    ConfigError,
    DeploymentContext,
    deployment_id_from_env,
    domain_from_env,
)
from webapp_smoke.logging_utils import log_json
from webapp_smoke.reporting import ConsoleReporter, summarize
from webapp_smoke.runner import run_all

EXAMPLE = "Example: DEPLOYMENT_ID=fastish-production webapp-smoke"


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate the infrastructure of a webapp deployment")
    parser.add_argument("--deployment-id", help="Deployment identifier (defaults to $DEPLOYMENT_ID)")
    parser.add_argument("--domain", help="Email domain (defaults to $DOMAIN, then fasti.sh)")
    parser.add_argument("--region", help="AWS region (defaults to the boto3 credential chain)")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    reporter = ConsoleReporter(color=not args.no_color and not os.environ.get("NO_COLOR"))
    reporter.banner()

    try:
        deployment_id = args.deployment_id or deployment_id_from_env()
    except ConfigError as e:
        reporter.error(str(e), EXAMPLE)
        return 1
    domain = args.domain or domain_from_env()

    try:
        session = boto3.Session(region_name=args.region)
        clients = AwsClients.from_session(session)
    except BotoCoreError as e:
        log_json("client_init_failed", level=logging.ERROR, error=str(e))
        reporter.error(f"Failed to initialize: {e}")
        return 1

    context = DeploymentContext(
        deployment_id=deployment_id,
        region=session.region_name or "",
        domain=domain,
    )
    reporter.context(context)

    log = run_all(clients, context, reporter)
    return summarize(log, reporter)


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
