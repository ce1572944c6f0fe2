from __future__ import annotations

from typing import List

from webapp_smoke.clients import AwsClients, collect
from webapp_smoke.config import DeploymentContext
from webapp_smoke.lookup import ResourceLookup, guarded, locate
from webapp_smoke.results import Outcome, ResultLog

TITLE = "SNS TOPICS"

SES_EVENT_TOPICS = ("bounce", "complaint", "reject", "received-emails")


def topic_name(topic_arn: str) -> str:
    return topic_arn.split(":")[-1]


def expected_topics(context: DeploymentContext) -> List[str]:
    return [context.resource_name(suffix) for suffix in SES_EVENT_TOPICS]


def _topic_lookup(expected: str) -> ResourceLookup:
    return ResourceLookup(
        name="SES Event Topics",
        match=lambda topic: topic_name(topic.get("TopicArn", "")) == expected,
        found=lambda topic: f"Topic '{expected}' exists",
        missing=f"Topic '{expected}' not found",
        missing_outcome=Outcome.WARNING,
    )


def check(clients: AwsClients, context: DeploymentContext) -> ResultLog:
    log = ResultLog(domain=TITLE)

    # one listing serves every expected topic
    topics = guarded(
        log, "SES Event Topics", "List topics",
        lambda: collect(clients.sns, "list_topics", "Topics"),
    )
    if topics is None:
        return log

    for expected in expected_topics(context):
        locate(log, _topic_lookup(expected), topics)

    return log
