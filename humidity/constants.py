from pathlib import Path

# ==========================================
# Local state
# ==========================================
HUMIDITY_DIR_NAME = ".humidity"
CONFIG_FILE_NAME = "config.json"
ENV_FILE_NAME = ".env.humidity"

TEMPLATES_DIR = Path(__file__).parent / "templates" / "services"

# Environment keys
ENV_AMZ_ID = "AMZ_ID"
ENV_AMZ_SEC = "AMZ_SEC"
ENV_AMZ_REGION = "AMZ_REGION"

AWS_REQUIRED_KEYS = [ENV_AMZ_ID, ENV_AMZ_SEC, ENV_AMZ_REGION]

# ==========================================
# Service kinds
# ==========================================
SERVICE_KIND_AWS_UPLOAD = "aws_upload"
SERVICE_KIND_INSTANT_DATABASE = "instant_database"

# ==========================================
# AWS
# ==========================================

# IAM
AWS_EXECUTION_ROLE_NAME = "LambdaExecutionRole"
AWS_POLICY_LAMBDA_BASIC_EXECUTION = "arn:aws:iam::aws:policy/service-role/AWSLambdaBasicExecutionRole"
AWS_LAMBDA_SERVICE_PRINCIPAL = "lambda.amazonaws.com"
AWS_APIGATEWAY_SERVICE_PRINCIPAL = "apigateway.amazonaws.com"
ROLE_PROPAGATION_SECONDS = 10

# Lambda
LAMBDA_DEFAULT_HANDLER = "index.handler"
LAMBDA_DEFAULT_RUNTIME = "python3.12"
LAMBDA_ENTRY_FILE = "index.py"
LAMBDA_ARCHIVE_NAME = "function.zip"
LAMBDA_UPDATE_TIMEOUT_SECONDS = 60
LAMBDA_ACTIVE_MAX_WAIT_SECONDS = 60
LAMBDA_ACTIVE_POLL_INTERVAL_SECONDS = 5
LAMBDA_STATE_ACTIVE = "Active"

# API Gateway (REST, v1)
API_GATEWAY_STAGE = "prod"
API_GATEWAY_PROXY_PATH_PART = "{proxy+}"
API_GATEWAY_PROXY_PATH = "/{proxy+}"
API_GATEWAY_HTTP_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
API_GATEWAY_CORS_ALLOW_HEADERS = "'Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token'"
API_GATEWAY_CORS_ALLOW_METHODS = "'GET,OPTIONS,POST,PUT,DELETE'"
API_GATEWAY_CORS_ALLOW_ORIGIN = "'*'"

# S3
INSTANT_DB_BUCKET_PREFIX = "instant-db"
