"""Companion S3 buckets for service kinds that store data."""

from botocore.exceptions import ClientError

from humidity.logger import logger
from humidity.providers.base import BaseProvisioner


class BucketProvisioner(BaseProvisioner):
    """Creates and deletes S3 buckets paired with a function."""

    resource_type = "S3 bucket"

    def exists(self, bucket_name: str) -> bool:
        try:
            self.clients["s3"].head_bucket(Bucket=bucket_name)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] in ("404", "NoSuchBucket", "NotFound"):
                return False
            raise

    def create(self, bucket_name: str, allowed_origins: list[str] = None) -> None:
        """Create the bucket with an open CORS policy. A bucket we already own is reused."""
        s3_client = self.clients["s3"]
        region = s3_client.meta.region_name

        create_args = {"Bucket": bucket_name}
        if region and region != "us-east-1":
            create_args["CreateBucketConfiguration"] = {"LocationConstraint": region}

        try:
            self._log_resource_creation(bucket_name)
            s3_client.create_bucket(**create_args)
        except ClientError as e:
            if e.response["Error"]["Code"] != "BucketAlreadyOwnedByYou":
                raise
            self._log_resource_exists(bucket_name)

        self.set_cors(bucket_name, allowed_origins or ["*"])

    def set_cors(self, bucket_name: str, allowed_origins: list[str]) -> None:
        self.clients["s3"].put_bucket_cors(
            Bucket=bucket_name,
            CORSConfiguration={
                "CORSRules": [{
                    "AllowedHeaders": ["*"],
                    "AllowedMethods": ["GET", "PUT", "POST", "DELETE", "HEAD"],
                    "AllowedOrigins": allowed_origins,
                    "ExposeHeaders": ["ETag"],
                    "MaxAgeSeconds": 3000,
                }]
            }
        )
        logger.info(f"CORS configuration set for bucket: {bucket_name}")

    def empty(self, bucket_name: str) -> None:
        """Delete every object and object version in the bucket."""
        s3_client = self.clients["s3"]

        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            if "Contents" in page:
                objects = [{"Key": obj["Key"]} for obj in page["Contents"]]
                s3_client.delete_objects(Bucket=bucket_name, Delete={"Objects": objects})
                logger.info(f"Deleted {len(objects)} objects from {bucket_name}")

        paginator = s3_client.get_paginator("list_object_versions")
        for page in paginator.paginate(Bucket=bucket_name):
            versions = page.get("Versions", []) + page.get("DeleteMarkers", [])
            if versions:
                objects = [{"Key": v["Key"], "VersionId": v["VersionId"]} for v in versions]
                s3_client.delete_objects(Bucket=bucket_name, Delete={"Objects": objects})

    def delete(self, bucket_name: str) -> None:
        """Empty and delete the bucket. Missing bucket is a no-op."""
        try:
            self.empty(bucket_name)
            self._log_resource_deletion(bucket_name)
            self.clients["s3"].delete_bucket(Bucket=bucket_name)
        except ClientError as e:
            if e.response["Error"]["Code"] != "NoSuchBucket":
                raise
            self._log_resource_not_found(bucket_name)
