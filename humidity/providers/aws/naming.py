"""
AWS resource naming conventions.

Naming Convention:
    - Lambda function: {display_name}-{uuid}   (the service's internal name)
    - REST API:        {internal_name}-api
    - Invoke grant:    apigateway-{api_id}
    - Bucket:          instant-db-{uuid}

The ``-api`` suffix is the only way to re-find a gateway that has no
persisted record, so teardown depends on it staying stable.
"""

import uuid
from typing import Optional

import humidity.constants as CONSTANTS


class AWSNaming:
    """
    Generates consistent AWS resource names for deployed services.

    Attributes:
        region: Region used when building invocation URLs and ARNs
    """

    def __init__(self, region: str):
        self._region = region

    @property
    def region(self) -> str:
        return self._region

    @staticmethod
    def new_service_id() -> str:
        """A fresh UUID string, used as both the record id and name suffix."""
        return str(uuid.uuid4())

    @staticmethod
    def internal_name(display_name: str, service_id: str) -> str:
        """Unique deployed name for a service."""
        return f"{display_name}-{service_id}"

    def execution_role(self) -> str:
        """Process-wide execution role shared by all deployed functions."""
        return CONSTANTS.AWS_EXECUTION_ROLE_NAME

    @staticmethod
    def rest_api(function_name: str) -> str:
        """REST API name for a function."""
        return f"{function_name}-api"

    @staticmethod
    def invoke_permission_statement(api_id: str) -> str:
        """Lambda permission statement id granting one API invoke rights."""
        return f"apigateway-{api_id}"

    @staticmethod
    def instant_db_bucket(service_id: Optional[str] = None) -> str:
        """Bucket name for an instant database service."""
        return f"{CONSTANTS.INSTANT_DB_BUCKET_PREFIX}-{service_id or uuid.uuid4()}"

    def invoke_url(self, api_id: str, function_name: str) -> str:
        """Public invocation URL of the deployed stage."""
        return (
            f"https://{api_id}.execute-api.{self._region}.amazonaws.com/"
            f"{CONSTANTS.API_GATEWAY_STAGE}/{function_name}"
        )

    def integration_uri(self, function_arn: str) -> str:
        """API Gateway integration URI pointing at a Lambda function."""
        return (
            f"arn:aws:apigateway:{self._region}:lambda:path/2015-03-31/"
            f"functions/{function_arn}/invocations"
        )

    def execute_api_source_arn(self, account_id: str, api_id: str) -> str:
        """Source ARN scoping an invoke permission to every stage/method of one API."""
        return f"arn:aws:execute-api:{self._region}:{account_id}:{api_id}/*/*"
