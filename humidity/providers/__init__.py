"""
Provider implementations package.

Package Structure:
    providers/
    ├── __init__.py         # This file
    ├── base.py             # Shared base classes
    └── aws/                # AWS implementation
        ├── provider.py     # AWSProvider class
        ├── clients.py      # boto3 client initialization
        ├── naming.py       # Resource naming conventions
        ├── archiver.py     # Deployment zip packaging
        ├── roles.py        # Execution role
        ├── functions.py    # Lambda functions
        ├── gateway.py      # REST API Gateway
        └── buckets.py      # Companion S3 buckets
"""
