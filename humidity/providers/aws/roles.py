"""
Execution role management.

All deployed functions share one execution role. Its ARN is resolved
lazily on first use (lookup, then create if absent) and cached on the
RoleManager, which lives as long as its provider.
"""

import json
import time
from dataclasses import dataclass
from typing import Callable, Optional, TYPE_CHECKING

from botocore.exceptions import ClientError

import humidity.constants as CONSTANTS
from humidity.logger import logger
from humidity.providers.base import BaseProvisioner

if TYPE_CHECKING:
    from humidity.providers.aws.provider import AWSProvider


@dataclass
class RoleHandle:
    role_name: str
    role_arn: Optional[str] = None


def _lambda_trust_policy() -> str:
    return json.dumps({
        "Version": "2012-10-17",
        "Statement": [{
            "Effect": "Allow",
            "Principal": {"Service": CONSTANTS.AWS_LAMBDA_SERVICE_PRINCIPAL},
            "Action": "sts:AssumeRole"
        }]
    })


class RoleManager(BaseProvisioner):
    """Ensures the execution role exists and tears it down."""

    resource_type = "IAM role"

    def __init__(self, provider: 'AWSProvider', sleep: Optional[Callable[[float], None]] = None):
        super().__init__(provider)
        self.handle = RoleHandle(role_name=provider.naming.execution_role())
        # True only right after ensure() created the role in this process
        self.created_new = False
        self._sleep = sleep

    def _pause(self, seconds: float) -> None:
        (self._sleep or time.sleep)(seconds)

    @property
    def role_name(self) -> str:
        return self.handle.role_name

    @property
    def role_arn(self) -> Optional[str]:
        return self.handle.role_arn

    def ensure(self) -> str:
        """Return the role ARN, looking the role up or creating it if needed."""
        if self.handle.role_arn:
            return self.handle.role_arn

        iam_client = self.clients["iam"]
        try:
            response = iam_client.get_role(RoleName=self.role_name)
            self.handle.role_arn = response["Role"]["Arn"]
            self.created_new = False
            self._log_resource_exists(self.role_name)
            return self.handle.role_arn
        except ClientError as e:
            if e.response["Error"]["Code"] != "NoSuchEntity":
                raise

        self._log_resource_creation(self.role_name)
        response = iam_client.create_role(
            RoleName=self.role_name,
            AssumeRolePolicyDocument=_lambda_trust_policy()
        )
        self.handle.role_arn = response["Role"]["Arn"]

        iam_client.attach_role_policy(
            RoleName=self.role_name,
            PolicyArn=CONSTANTS.AWS_POLICY_LAMBDA_BASIC_EXECUTION
        )
        logger.info(f"Attached IAM policy ARN: {CONSTANTS.AWS_POLICY_LAMBDA_BASIC_EXECUTION}")

        self.created_new = True
        return self.handle.role_arn

    def wait_for_propagation(self, seconds: float = CONSTANTS.ROLE_PROPAGATION_SECONDS) -> None:
        """Wait for a freshly created role to become assumable.

        IAM is eventually consistent: using the role right after creation can
        fail even though create_role succeeded. No-op for an existing role.
        """
        if not self.created_new:
            return
        logger.info("Waiting for propagation...")
        self._pause(seconds)
        self.created_new = False

    def exists(self) -> bool:
        try:
            self.clients["iam"].get_role(RoleName=self.role_name)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] == "NoSuchEntity":
                return False
            raise

    def delete(self) -> None:
        """Detach every policy, then delete the role. Missing role is a no-op."""
        iam_client = self.clients["iam"]
        role_name = self.role_name
        try:
            paginator = iam_client.get_paginator("list_attached_role_policies")
            for page in paginator.paginate(RoleName=role_name):
                for policy in page["AttachedPolicies"]:
                    iam_client.detach_role_policy(RoleName=role_name, PolicyArn=policy["PolicyArn"])
                    logger.info(f"Detached policy: {policy['PolicyArn']}")

            response = iam_client.list_role_policies(RoleName=role_name)
            for policy_name in response["PolicyNames"]:
                iam_client.delete_role_policy(RoleName=role_name, PolicyName=policy_name)

            self._log_resource_deletion(role_name)
            iam_client.delete_role(RoleName=role_name)
        except ClientError as e:
            if e.response["Error"]["Code"] != "NoSuchEntity":
                raise
            self._log_resource_not_found(role_name)

        self.handle.role_arn = None
        self.created_new = False
