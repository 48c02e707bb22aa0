"""Client for asynchronous batch jobs (``/batches``)."""

import logging
from typing import Any, Dict, Literal, Optional

from openai_tools.batch.response import Batch, BatchList
from openai_tools.common.client import BaseClient
from openai_tools.config.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

BATCHES_PATH = "batches"

BatchEndpoint = Literal[
    "/v1/chat/completions",
    "/v1/embeddings",
    "/v1/completions",
    "/v1/responses",
    "/v1/moderations",
]


class Batches(BaseClient):
    def create(
        self,
        input_file_id: str,
        endpoint: BatchEndpoint = "/v1/chat/completions",
        completion_window: Literal["24h"] = "24h",
        metadata: Optional[Dict[str, str]] = None,
    ) -> Batch:
        """
        Start a batch over an uploaded JSONL file (purpose ``batch``).

        Args:
            input_file_id: Id of the uploaded requests file
            endpoint: Endpoint every request in the file targets
            completion_window: Only ``24h`` is accepted
            metadata: Up to 16 key/value pairs
        """
        body: Dict[str, Any] = {
            "input_file_id": input_file_id,
            "endpoint": endpoint,
            "completion_window": completion_window,
        }
        if metadata is not None:
            body["metadata"] = dict(metadata)
        batch = self.http.post(BATCHES_PATH, Batch, body)
        logger.info(f"Created batch {batch.id} ({batch.status.value})")
        return batch

    def retrieve(self, batch_id: str) -> Batch:
        return self.http.get(f"{BATCHES_PATH}/{batch_id}", Batch)

    def cancel(self, batch_id: str) -> Batch:
        return self.http.post(f"{BATCHES_PATH}/{batch_id}/cancel", Batch)

    def list(self, after: Optional[str] = None, limit: Optional[int] = None) -> BatchList:
        return self.http.get(BATCHES_PATH, BatchList, {"after": after, "limit": limit})
