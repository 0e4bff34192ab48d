"""File upload service: a function that writes request bodies to S3."""

import humidity.constants as CONSTANTS
from humidity.services.base import ServiceStrategy


class AWSUploadService(ServiceStrategy):
    """The function receives the AWS credentials and region as environment."""

    kind = CONSTANTS.SERVICE_KIND_AWS_UPLOAD
