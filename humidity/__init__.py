"""
Humidity: deploys template-based serverless services to AWS.

Each service is a Lambda function behind a REST API Gateway, sharing one
execution role, with an optional companion S3 bucket. Deployed services are
recorded in ``~/.humidity/config.json``.
"""

__version__ = "0.1.0"
