"""
Tests for the DynamoDB table backend against a mocked boto3 resource.
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from slack_integrations.store.dynamodb_table import DynamoDBTable


@pytest.fixture
def boto_table():
    return MagicMock()


@pytest.fixture
def dynamo(boto_table):
    resource = MagicMock()
    resource.Table.return_value = boto_table
    return DynamoDBTable(table_name="SlackIntegrations", region="ap-northeast-1", resource=resource)


class TestDynamoDBTable:
    """Tests for DynamoDBTable."""

    @pytest.mark.asyncio
    async def test_put_converts_floats(self, dynamo, boto_table):
        await dynamo.put_item({"PK": "INSTALLATION#", "SK": "T1", "installation": {"installed_at": 1700000000.5}})

        item = boto_table.put_item.call_args.kwargs["Item"]
        assert item["installation"]["installed_at"] == Decimal("1700000000.5")

    @pytest.mark.asyncio
    async def test_put_requires_key(self, dynamo, boto_table):
        with pytest.raises(ValueError):
            await dynamo.put_item({"PK": "WORKSPACE#"})
        boto_table.put_item.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_converts_decimals(self, dynamo, boto_table):
        boto_table.get_item.return_value = {
            "Item": {"PK": "INSTALLATION#", "SK": "T1", "count": Decimal("3"), "at": Decimal("1.5")}
        }

        item = await dynamo.get_item("INSTALLATION#", "T1")

        assert item == {"PK": "INSTALLATION#", "SK": "T1", "count": 3, "at": 1.5}
        boto_table.get_item.assert_called_once_with(Key={"PK": "INSTALLATION#", "SK": "T1"})

    @pytest.mark.asyncio
    async def test_get_missing(self, dynamo, boto_table):
        boto_table.get_item.return_value = {}
        assert await dynamo.get_item("WORKSPACE#", "T404") is None

    @pytest.mark.asyncio
    async def test_query_follows_pages(self, dynamo, boto_table):
        boto_table.query.side_effect = [
            {"Items": [{"PK": "PROJECT#P1", "SK": "INTEGRATION#a"}], "LastEvaluatedKey": {"SK": "INTEGRATION#a"}},
            {"Items": [{"PK": "PROJECT#P1", "SK": "INTEGRATION#b"}]},
        ]

        items = await dynamo.query("PROJECT#P1", "INTEGRATION#")

        assert [item["SK"] for item in items] == ["INTEGRATION#a", "INTEGRATION#b"]
        assert boto_table.query.call_count == 2
        assert boto_table.query.call_args_list[1].kwargs["ExclusiveStartKey"] == {"SK": "INTEGRATION#a"}

    @pytest.mark.asyncio
    async def test_client_errors_propagate(self, dynamo, boto_table):
        boto_table.delete_item.side_effect = ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "no table"}}, "DeleteItem"
        )
        with pytest.raises(ClientError):
            await dynamo.delete_item("WORKSPACE#", "T1")

    @pytest.mark.asyncio
    async def test_health_check(self, dynamo, boto_table):
        boto_table.table_status = "ACTIVE"

        health = await dynamo.health_check()

        assert health["status"] == "healthy"
        assert health["table_status"] == "ACTIVE"

    @pytest.mark.asyncio
    async def test_health_check_failure(self, dynamo, boto_table):
        boto_table.load.side_effect = RuntimeError("unreachable")

        health = await dynamo.health_check()

        assert health["status"] == "unhealthy"
        assert health["error"] == "unreachable"
