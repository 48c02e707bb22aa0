"""Batch API."""

from openai_tools.batch.request import Batches
from openai_tools.batch.response import BatchStatus
