import json
import os
import uuid

import boto3


def _require_env(name: str) -> str:
    """Get required environment variable or raise error at module load time."""
    value = os.environ.get(name, "").strip()
    if not value:
        raise EnvironmentError(f"CRITICAL: Required environment variable '{name}' is missing or empty")
    return value


BUCKET_NAME = _require_env("BUCKET_NAME")

s3_client = boto3.client(
    "s3",
    region_name=_require_env("AMZ_REGION"),
    aws_access_key_id=_require_env("AMZ_ID"),
    aws_secret_access_key=_require_env("AMZ_SEC"),
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
    "Access-Control-Allow-Methods": "GET,OPTIONS,POST,PUT,DELETE",
}


def _response(status_code: int, body) -> dict:
    return {
        "statusCode": status_code,
        "headers": {**CORS_HEADERS, "Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def _route(event, context=None) -> tuple[str, str | None]:
    # /[{function_name}/]{collection}[/{document_id}] below the proxy resource
    path = (event.get("pathParameters") or {}).get("proxy", "")
    parts = [p for p in path.split("/") if p]
    function_name = getattr(context, "function_name", None)
    if parts and function_name and parts[0] == function_name:
        parts = parts[1:]
    if not parts:
        return "", None
    return parts[0], parts[1] if len(parts) > 1 else None


def _key(collection: str, document_id: str) -> str:
    return f"{collection}/{document_id}.json"


def _read(collection: str, document_id: str):
    try:
        obj = s3_client.get_object(Bucket=BUCKET_NAME, Key=_key(collection, document_id))
    except s3_client.exceptions.NoSuchKey:
        return None
    return json.loads(obj["Body"].read())


def _list(collection: str) -> list:
    documents = []
    paginator = s3_client.get_paginator("list_objects_v2")
    for page in paginator.paginate(Bucket=BUCKET_NAME, Prefix=f"{collection}/"):
        for item in page.get("Contents", []):
            obj = s3_client.get_object(Bucket=BUCKET_NAME, Key=item["Key"])
            documents.append(json.loads(obj["Body"].read()))
    return documents


def handler(event, context):
    method = event.get("httpMethod", "GET")
    if method == "OPTIONS":
        return _response(200, {})

    collection, document_id = _route(event, context)
    if not collection:
        return _response(400, {"error": "collection is required"})

    try:
        if method == "GET":
            if document_id is None:
                return _response(200, _list(collection))
            document = _read(collection, document_id)
            if document is None:
                return _response(404, {"error": "not found"})
            return _response(200, document)

        if method in ("POST", "PUT"):
            document = json.loads(event.get("body") or "{}")
            document_id = document_id or document.get("id") or str(uuid.uuid4())
            document["id"] = document_id
            s3_client.put_object(
                Bucket=BUCKET_NAME,
                Key=_key(collection, document_id),
                Body=json.dumps(document).encode("utf-8"),
                ContentType="application/json",
            )
            return _response(201 if method == "POST" else 200, document)

        if method == "DELETE":
            if document_id is None:
                return _response(400, {"error": "document id is required"})
            s3_client.delete_object(Bucket=BUCKET_NAME, Key=_key(collection, document_id))
            return _response(200, {"deleted": document_id})

        return _response(405, {"error": f"Method {method} not allowed"})

    except json.JSONDecodeError:
        return _response(400, {"error": "body must be JSON"})
    except Exception as e:
        print(f"Instant Database Error: {e}")
        return _response(500, {"error": "internal error"})
