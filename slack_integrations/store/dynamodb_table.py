"""
DynamoDB table implementation (PK partition key, SK sort key)
"""
import json
import time
import asyncio
from decimal import Decimal
from typing import Any, Optional, Dict, List
import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError
from slack_integrations.store.base import TableInterface, PARTITION_KEY, SORT_KEY, require_key
from slack_integrations.core.config import settings
from slack_integrations.core.logging_config import get_logger


def _to_dynamo(item: Dict[str, Any]) -> Dict[str, Any]:
    """DynamoDB rejects floats, so numbers go in as Decimal"""
    return json.loads(json.dumps(item), parse_float=Decimal)


def _from_dynamo(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_dynamo(v) for v in value]
    return value


class DynamoDBTable(TableInterface):
    """boto3-backed table; blocking calls run in a worker thread"""

    def __init__(self, table_name: Optional[str] = None, region: Optional[str] = None,
                 endpoint_url: Optional[str] = None, resource=None):
        self.logger = get_logger("slack_integrations.store.dynamodb")
        self.table_name = table_name or settings.DYNAMODB_TABLE
        self.region = region or settings.DYNAMODB_REGION
        endpoint_url = endpoint_url or settings.DYNAMODB_ENDPOINT_URL

        if resource is None:
            resource = boto3.resource("dynamodb", region_name=self.region, endpoint_url=endpoint_url)
        self._table = resource.Table(self.table_name)
        self.logger.info(f"DynamoDB table '{self.table_name}' ({self.region}) initialized")

    async def get_item(self, pk: str, sk: str) -> Optional[Dict[str, Any]]:
        try:
            response = await asyncio.to_thread(
                self._table.get_item, Key={PARTITION_KEY: pk, SORT_KEY: sk}
            )
        except ClientError as e:
            self.logger.error(f"DynamoDB error getting item '{pk}/{sk}': {e}")
            raise
        item = response.get("Item")
        return _from_dynamo(item) if item is not None else None

    async def put_item(self, item: Dict[str, Any]) -> None:
        pk, sk = require_key(item)
        try:
            await asyncio.to_thread(self._table.put_item, Item=_to_dynamo(item))
        except ClientError as e:
            self.logger.error(f"DynamoDB error putting item '{pk}/{sk}': {e}")
            raise

    async def delete_item(self, pk: str, sk: str) -> None:
        try:
            await asyncio.to_thread(
                self._table.delete_item, Key={PARTITION_KEY: pk, SORT_KEY: sk}
            )
        except ClientError as e:
            self.logger.error(f"DynamoDB error deleting item '{pk}/{sk}': {e}")
            raise

    async def query(self, pk: str, sk_prefix: Optional[str] = None) -> List[Dict[str, Any]]:
        condition = Key(PARTITION_KEY).eq(pk)
        if sk_prefix:
            condition = condition & Key(SORT_KEY).begins_with(sk_prefix)

        items: List[Dict[str, Any]] = []
        kwargs: Dict[str, Any] = {"KeyConditionExpression": condition}
        try:
            # Follows every page; partitions are not bounded
            while True:
                response = await asyncio.to_thread(self._table.query, **kwargs)
                items.extend(_from_dynamo(item) for item in response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except ClientError as e:
            self.logger.error(f"DynamoDB error querying partition '{pk}': {e}")
            raise
        return items

    async def health_check(self) -> Dict[str, Any]:
        """Check DynamoDB table health and return status"""
        try:
            start_time = time.time()
            await asyncio.to_thread(self._table.load)
            response_time = (time.time() - start_time) * 1000  # ms

            return {
                "status": "healthy",
                "backend": "dynamodb",
                "response_time_ms": round(response_time, 2),
                "table": self.table_name,
                "table_status": self._table.table_status,
                "timestamp": time.time()
            }

        except Exception as e:
            self.logger.error(f"DynamoDB health check failed: {e}")
            return {
                "status": "unhealthy",
                "backend": "dynamodb",
                "error": str(e),
                "timestamp": time.time()
            }

    async def get_info(self) -> Dict[str, Any]:
        try:
            await asyncio.to_thread(self._table.load)
            return {
                "backend": "dynamodb",
                "table": self.table_name,
                "region": self.region,
                "item_count": self._table.item_count,
                "key_schema": self._table.key_schema,
            }
        except Exception as e:
            self.logger.error(f"Error getting DynamoDB info: {e}")
            return {
                "backend": "dynamodb",
                "error": str(e)
            }
