"""
Instant database service: a JSON document store kept in its own bucket.

The bucket ``instant-db-<service id>`` is created before the function so
its name can be passed in as ``BUCKET_NAME``. It is recorded under
``config["bucketName"]`` and deleted (emptied first) on teardown.
"""

from typing import Dict, List

import humidity.constants as CONSTANTS
from humidity.models import ServiceRecord
from humidity.services.base import ServiceStrategy, TeardownStep

BUCKET_NAME_ENV = "BUCKET_NAME"


class InstantDatabaseService(ServiceStrategy):

    kind = CONSTANTS.SERVICE_KIND_INSTANT_DATABASE

    def provision_resources(self, service_id: str) -> Dict[str, str]:
        bucket_name = self.provider.naming.instant_db_bucket(service_id)
        self.provider.buckets.create(bucket_name)
        return {"bucketName": bucket_name}

    def environment(self, settings, resources: Dict[str, str]) -> Dict[str, str]:
        env = super().environment(settings, resources)
        env[BUCKET_NAME_ENV] = resources["bucketName"]
        return env

    def extra_teardown_steps(self, record: ServiceRecord) -> List[TeardownStep]:
        bucket_name = record.bucket_name or self.provider.naming.instant_db_bucket(record.id)
        return [("bucket", lambda: self.provider.buckets.delete(bucket_name))]
