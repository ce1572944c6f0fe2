from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

import boto3
from botocore.client import BaseClient


@dataclass(frozen=True)
class AwsClients:
    ec2: BaseClient
    sesv2: BaseClient
    cognito: BaseClient
    dynamodb: BaseClient
    apigateway: BaseClient
    lambda_: BaseClient
    s3: BaseClient
    sns: BaseClient
    logs: BaseClient

    @classmethod
    def from_session(cls, session: boto3.Session) -> "AwsClients":
        return cls(
            ec2=session.client("ec2"),
            sesv2=session.client("sesv2"),
            cognito=session.client("cognito-idp"),
            dynamodb=session.client("dynamodb"),
            apigateway=session.client("apigateway"),
            lambda_=session.client("lambda"),
            s3=session.client("s3"),
            sns=session.client("sns"),
            logs=session.client("logs"),
        )


def collect(client: BaseClient, operation: str, key: str, **kwargs: Any) -> List[Dict[str, Any]]:
    items: List[Dict[str, Any]] = []
    for page in client.get_paginator(operation).paginate(**kwargs):
        items.extend(page.get(key, []))
    return items
