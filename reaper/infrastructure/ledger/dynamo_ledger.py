"""DynamoDB status ledger (BatchWriteItem with per-item unprocessed reporting)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from reaper.domain.entities import StatusLedgerEntry
from reaper.infrastructure.exceptions import LedgerWriteError

logger = logging.getLogger(__name__)


class DynamoStatusLedger:
    """Writes ledger entries as items keyed by record id.

    Items DynamoDB hands back as UnprocessedItems are acknowledged False;
    they are not retried here.
    """

    # BatchWriteItem accepts at most 25 put requests.
    BATCH_SIZE = 25

    def __init__(
        self,
        table_name: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        self.table_name = table_name
        if client is not None:
            self._client = client
            return
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client("dynamodb", region_name=region, **extra)

    @staticmethod
    def _to_item(entry: StatusLedgerEntry) -> dict[str, Any]:
        return {
            "id": {"S": entry.record_id},
            "deletedBy": {"S": entry.deleted_by},
            "deleteTime": {"S": entry.delete_time.isoformat()},
            "isDeleted": {"BOOL": entry.is_deleted},
        }

    def _write_batch(self, batch: list[StatusLedgerEntry]) -> set[str]:
        """Write one batch; return ids left unprocessed."""
        try:
            resp = self._client.batch_write_item(
                RequestItems={
                    self.table_name: [
                        {"PutRequest": {"Item": self._to_item(e)}} for e in batch
                    ]
                }
            )
        except (ClientError, BotoCoreError) as e:
            raise LedgerWriteError(str(e)) from e
        unprocessed = resp.get("UnprocessedItems", {}).get(self.table_name, [])
        return {req["PutRequest"]["Item"]["id"]["S"] for req in unprocessed}

    async def set_statuses(
        self, entries: Iterable[StatusLedgerEntry]
    ) -> dict[str, bool]:
        entry_list = list(entries)
        acks: dict[str, bool] = {}
        for start in range(0, len(entry_list), self.BATCH_SIZE):
            batch = entry_list[start : start + self.BATCH_SIZE]
            unprocessed = await asyncio.to_thread(self._write_batch, batch)
            if unprocessed:
                logger.warning(
                    "DynamoDB left %s ledger item(s) unprocessed in %s",
                    len(unprocessed),
                    self.table_name,
                )
            for entry in batch:
                acks[entry.record_id] = entry.record_id not in unprocessed
        return acks
