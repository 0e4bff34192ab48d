"""
API Gateway (REST) provisioning.

Creating a REST API resource or method twice raises ConflictException, so
every step that is not naturally idempotent falls back to retrieving the
existing resource. The ``<function>-api`` naming convention is how an API is
re-found when no record holds its id.

Wiring per API:
    REST API -> root "/" -> "/{proxy+}" -> {GET, POST, PUT, DELETE, OPTIONS}
        each method: AWS_PROXY integration to the function, plus CORS headers
        on the method response and integration response
    -> deployment to stage "prod"
    -> lambda:InvokeFunction permission for apigateway.amazonaws.com
"""

from typing import Optional, Tuple, TYPE_CHECKING

from botocore.exceptions import ClientError

import humidity.constants as CONSTANTS
from humidity.logger import logger
from humidity.providers.base import BaseProvisioner

if TYPE_CHECKING:
    from humidity.models import ServiceRecord


def _error_code(e: ClientError) -> str:
    return e.response["Error"]["Code"]


def _account_id_from_arn(arn: str) -> str:
    # arn:aws:lambda:<region>:<account>:function:<name>
    return arn.split(":")[4]


class GatewayProvisioner(BaseProvisioner):
    """Creates, reuses and deletes the REST API fronting a function."""

    resource_type = "REST API"

    @property
    def naming(self):
        return self._provider.naming

    # ==========================================
    # Lookup
    # ==========================================

    def find_api_id(self, function_name: str) -> Optional[str]:
        """Find the REST API for a function by naming convention."""
        api_name = self.naming.rest_api(function_name)
        paginator = self.clients["apigateway"].get_paginator("get_rest_apis")
        for page in paginator.paginate():
            for api in page.get("items", []):
                if api.get("name") == api_name and api.get("id"):
                    return api["id"]
        return None

    def check_endpoint(self, function_name: str) -> Optional[str]:
        """Return the invocation URL of an existing API, or None."""
        api_id = self.find_api_id(function_name)
        if not api_id:
            return None
        return self.naming.invoke_url(api_id, function_name)

    def _api_exists(self, api_id: str) -> bool:
        try:
            self.clients["apigateway"].get_rest_api(restApiId=api_id)
            return True
        except ClientError as e:
            if _error_code(e) == "NotFoundException":
                return False
            raise

    # ==========================================
    # Create
    # ==========================================

    def ensure(self, function_name: str, function_arn: str) -> Tuple[str, str]:
        """Create (or reuse) the API for a function.

        Returns:
            Tuple of (invocation url, api id)
        """
        existing_id = self.find_api_id(function_name)
        if existing_id:
            self._log_resource_exists(self.naming.rest_api(function_name))
            return self.naming.invoke_url(existing_id, function_name), existing_id

        apigw_client = self.clients["apigateway"]
        api_name = self.naming.rest_api(function_name)

        self._log_resource_creation(api_name)
        api = apigw_client.create_rest_api(
            name=api_name,
            binaryMediaTypes=["*/*"],
            endpointConfiguration={"types": ["REGIONAL"]}
        )
        api_id = api["id"]

        resource_id = self._ensure_proxy_resource(api_id)
        integration_uri = self.naming.integration_uri(function_arn)

        for method in CONSTANTS.API_GATEWAY_HTTP_METHODS:
            self._wire_method(api_id, resource_id, method, integration_uri)

        apigw_client.create_deployment(
            restApiId=api_id,
            stageName=CONSTANTS.API_GATEWAY_STAGE
        )
        logger.info(f"Deployed {api_name} to stage '{CONSTANTS.API_GATEWAY_STAGE}'")

        self._grant_invoke(function_name, function_arn, api_id)

        return self.naming.invoke_url(api_id, function_name), api_id

    def _root_resource_id(self, api_id: str) -> str:
        resources = self.clients["apigateway"].get_resources(restApiId=api_id)
        for resource in resources["items"]:
            if resource.get("path") == "/":
                return resource["id"]
        return resources["items"][0]["id"]

    def _find_resource_by_path(self, api_id: str, path: str) -> Optional[dict]:
        paginator = self.clients["apigateway"].get_paginator("get_resources")
        for page in paginator.paginate(restApiId=api_id):
            for resource in page.get("items", []):
                if resource.get("path") == path:
                    return resource
        return None

    def _ensure_proxy_resource(self, api_id: str) -> str:
        apigw_client = self.clients["apigateway"]
        root_id = self._root_resource_id(api_id)
        try:
            resource = apigw_client.create_resource(
                restApiId=api_id,
                parentId=root_id,
                pathPart=CONSTANTS.API_GATEWAY_PROXY_PATH_PART
            )
        except ClientError as e:
            if _error_code(e) != "ConflictException":
                raise
            logger.info("Resource already exists, retrieving existing resource")
            resource = self._find_resource_by_path(api_id, CONSTANTS.API_GATEWAY_PROXY_PATH)
            if not resource:
                raise
        return resource["id"]

    def _wire_method(self, api_id: str, resource_id: str, method: str, integration_uri: str) -> None:
        apigw_client = self.clients["apigateway"]
        try:
            apigw_client.put_method(
                restApiId=api_id,
                resourceId=resource_id,
                httpMethod=method,
                authorizationType="NONE"
            )
        except ClientError as e:
            if _error_code(e) != "ConflictException":
                raise
            logger.info(f"Method {method} already exists, updating integration")

        apigw_client.put_integration(
            restApiId=api_id,
            resourceId=resource_id,
            httpMethod=method,
            type="AWS_PROXY",
            integrationHttpMethod="POST",
            uri=integration_uri,
            contentHandling="CONVERT_TO_BINARY"
        )

        apigw_client.put_method_response(
            restApiId=api_id,
            resourceId=resource_id,
            httpMethod=method,
            statusCode="200",
            responseModels={"application/json": "Empty"},
            responseParameters={
                "method.response.header.Access-Control-Allow-Headers": True,
                "method.response.header.Access-Control-Allow-Methods": True,
                "method.response.header.Access-Control-Allow-Origin": True,
                "method.response.header.Content-Type": True,
            }
        )

        apigw_client.put_integration_response(
            restApiId=api_id,
            resourceId=resource_id,
            httpMethod=method,
            statusCode="200",
            responseTemplates={"application/json": ""},
            responseParameters={
                "method.response.header.Access-Control-Allow-Headers": CONSTANTS.API_GATEWAY_CORS_ALLOW_HEADERS,
                "method.response.header.Access-Control-Allow-Methods": CONSTANTS.API_GATEWAY_CORS_ALLOW_METHODS,
                "method.response.header.Access-Control-Allow-Origin": CONSTANTS.API_GATEWAY_CORS_ALLOW_ORIGIN,
                "method.response.header.Content-Type": "integration.response.header.Content-Type",
            },
            contentHandling="CONVERT_TO_BINARY"
        )
        logger.debug(f"Wired {method} on {api_id}/{resource_id}")

    def _grant_invoke(self, function_name: str, function_arn: str, api_id: str) -> None:
        source_arn = self.naming.execute_api_source_arn(_account_id_from_arn(function_arn), api_id)
        try:
            self.clients["lambda"].add_permission(
                FunctionName=function_name,
                StatementId=self.naming.invoke_permission_statement(api_id),
                Action="lambda:InvokeFunction",
                Principal=CONSTANTS.AWS_APIGATEWAY_SERVICE_PRINCIPAL,
                SourceArn=source_arn
            )
        except ClientError as e:
            if _error_code(e) != "ResourceConflictException":
                raise
            logger.info(f"Invoke permission for {api_id} already granted on {function_name}")
        logger.info(f"Granted API Gateway invoke permission on {function_name}")

    # ==========================================
    # Delete
    # ==========================================

    def resolve_api_id(self, record: 'ServiceRecord') -> Optional[str]:
        """Prefer the persisted api id; fall back to the naming convention."""
        if record.apiId and self._api_exists(record.apiId):
            return record.apiId
        return self.find_api_id(record.internal_name)

    def delete(self, record: 'ServiceRecord') -> None:
        """Delete the API and its invoke permission. No-op if the API is gone."""
        api_id = self.resolve_api_id(record)
        if not api_id:
            logger.info(f"No API found for function {record.name}")
            return

        self._log_resource_deletion(api_id)
        try:
            self.clients["apigateway"].delete_rest_api(restApiId=api_id)
        except ClientError as e:
            if _error_code(e) != "NotFoundException":
                raise
        logger.info(f"API Gateway for {record.name} deleted successfully")

        self.revoke_invoke(record.internal_name, api_id)

    def revoke_invoke(self, function_name: str, api_id: str) -> None:
        try:
            self.clients["lambda"].remove_permission(
                FunctionName=function_name,
                StatementId=self.naming.invoke_permission_statement(api_id)
            )
            logger.info(f"Removed API Gateway permission from Lambda function {function_name}")
        except ClientError as e:
            if _error_code(e) != "ResourceNotFoundException":
                raise
            logger.info(f"Invoke permission for {api_id} not found on {function_name}")
