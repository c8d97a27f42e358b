from typing import Any, Dict, Optional
import boto3
from botocore.config import Config
from botocore.exceptions import ClientError
from expense_tracker.core.settings import settings

def _resource():
    access = settings.AWS_ACCESS_KEY_ID.get_secret_value()
    secret = settings.AWS_SECRET_ACCESS_KEY.get_secret_value()
    return boto3.resource(
        "dynamodb",
        endpoint_url=settings.DYNAMODB_ENDPOINT_URL,
        aws_access_key_id=access or None,
        aws_secret_access_key=secret or None,
        region_name=settings.AWS_REGION,
        config=Config(
            retries={"max_attempts": 3, "mode": "standard"},
            connect_timeout=5,
            read_timeout=10,
        ),
    )

DYNAMODB = _resource()

TABLE_NAME = settings.PREFERENCES_TABLE

def preferences_table():
    return DYNAMODB.Table(TABLE_NAME)

def get_item(user_id: str) -> Optional[Dict[str, Any]]:
    res = preferences_table().get_item(Key={"userId": user_id})
    return res.get("Item")

def put_item(item: Dict[str, Any]) -> None:
    preferences_table().put_item(Item=item)

def create_preferences_table() -> bool:
    """Create the table (hash key ``userId``, on-demand). False if it already exists."""
    try:
        DYNAMODB.create_table(
            TableName=TABLE_NAME,
            KeySchema=[{"AttributeName": "userId", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "userId", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
    except ClientError as e:
        code = (e.response.get("Error") or {}).get("Code")
        if code == "ResourceInUseException":
            return False
        raise
    return True
