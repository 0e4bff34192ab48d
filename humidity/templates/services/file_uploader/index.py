import base64
import json
import os

import boto3


def _require_env(name: str) -> str:
    """Get required environment variable or raise error at module load time."""
    value = os.environ.get(name, "").strip()
    if not value:
        raise EnvironmentError(f"CRITICAL: Required environment variable '{name}' is missing or empty")
    return value


s3_client = boto3.client(
    "s3",
    region_name=_require_env("AMZ_REGION"),
    aws_access_key_id=_require_env("AMZ_ID"),
    aws_secret_access_key=_require_env("AMZ_SEC"),
)

PRESIGNED_URL_EXPIRY_SECONDS = 3600

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
    "Access-Control-Allow-Methods": "GET,OPTIONS,POST,PUT,DELETE",
}


def _response(status_code: int, body: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": {**CORS_HEADERS, "Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def handler(event, context):
    method = event.get("httpMethod", "GET")
    params = event.get("queryStringParameters") or {}

    if method == "OPTIONS":
        return _response(200, {})

    bucket = params.get("bucket")
    key = params.get("key")
    if not bucket or not key:
        return _response(400, {"error": "bucket and key are required"})

    content_type = params.get("contentType", "application/octet-stream")

    try:
        if method == "GET":
            # Presigned PUT so large files go straight to S3
            url = s3_client.generate_presigned_url(
                "put_object",
                Params={"Bucket": bucket, "Key": key, "ContentType": content_type},
                ExpiresIn=PRESIGNED_URL_EXPIRY_SECONDS,
            )
            return _response(200, {"uploadUrl": url, "expiresIn": PRESIGNED_URL_EXPIRY_SECONDS})

        if method in ("POST", "PUT"):
            body = event.get("body") or ""
            data = base64.b64decode(body) if event.get("isBase64Encoded") else body.encode("utf-8")
            s3_client.put_object(
                Bucket=bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                ContentDisposition="attachment",
            )
            return _response(200, {"message": "File uploaded successfully", "key": key, "size": len(data)})

        if method == "DELETE":
            s3_client.delete_object(Bucket=bucket, Key=key)
            return _response(200, {"message": "File deleted", "key": key})

        return _response(405, {"error": f"Method {method} not allowed"})

    except Exception as e:
        print(f"File Uploader Error: {e}")
        return _response(500, {"error": "File upload failed"})
