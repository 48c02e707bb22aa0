"""Client for fine-tuning jobs (``/fine_tuning/jobs``)."""

import logging
from typing import Any, Dict, Literal, Optional, Union

from openai_tools.common.client import BaseClient
from openai_tools.common.errors import ConfigError
from openai_tools.config.constants import LOGGER_NAME
from openai_tools.fine_tuning.response import (
    FineTuningCheckpointList,
    FineTuningEventList,
    FineTuningJob,
    FineTuningJobList,
)

logger = logging.getLogger(LOGGER_NAME)

JOBS_PATH = "fine_tuning/jobs"

FINE_TUNABLE_MODELS = (
    "gpt-4.1-2025-04-14",
    "gpt-4.1-mini-2025-04-14",
    "gpt-4.1-nano-2025-04-14",
    "gpt-4o-2024-08-06",
    "gpt-4o-mini-2024-07-18",
    "gpt-3.5-turbo-0125",
)

MAX_SUFFIX_LENGTH = 64

MethodType = Literal["supervised", "dpo"]


def fine_tuning_method(
    method_type: MethodType = "supervised",
    n_epochs: Optional[Union[int, str]] = None,
    batch_size: Optional[Union[int, str]] = None,
    learning_rate_multiplier: Optional[Union[float, str]] = None,
    beta: Optional[Union[float, str]] = None,
) -> Dict[str, Any]:
    """
    Build the ``method`` object of a job.

    Hyperparameters may be numbers or ``"auto"``; ``beta`` applies to DPO only.
    """
    if beta is not None and method_type != "dpo":
        raise ConfigError("beta is only valid for the dpo method")
    hyperparameters = {
        key: value
        for key, value in (
            ("n_epochs", n_epochs),
            ("batch_size", batch_size),
            ("learning_rate_multiplier", learning_rate_multiplier),
            ("beta", beta),
        )
        if value is not None
    }
    method: Dict[str, Any] = {"type": method_type}
    method[method_type] = {"hyperparameters": hyperparameters} if hyperparameters else {}
    return method


class FineTuning(BaseClient):
    def create(
        self,
        model: str,
        training_file: str,
        validation_file: Optional[str] = None,
        suffix: Optional[str] = None,
        seed: Optional[int] = None,
        method: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> FineTuningJob:
        if not training_file:
            raise ConfigError("training_file is required")
        if suffix is not None and len(suffix) > MAX_SUFFIX_LENGTH:
            raise ConfigError(f"suffix must be at most {MAX_SUFFIX_LENGTH} characters")
        if model not in FINE_TUNABLE_MODELS and not model.startswith("ft:"):
            logger.warning(f"Model '{model}' is not a known fine-tunable model")
        body: Dict[str, Any] = {"model": model, "training_file": training_file}
        for key, value in (
            ("validation_file", validation_file),
            ("suffix", suffix),
            ("seed", seed),
            ("method", method),
            ("metadata", metadata),
        ):
            if value is not None:
                body[key] = value
        job = self.http.post(JOBS_PATH, FineTuningJob, body)
        logger.info(f"Created fine-tuning job {job.id} ({job.status})")
        return job

    def retrieve(self, job_id: str) -> FineTuningJob:
        return self.http.get(f"{JOBS_PATH}/{job_id}", FineTuningJob)

    def cancel(self, job_id: str) -> FineTuningJob:
        return self.http.post(f"{JOBS_PATH}/{job_id}/cancel", FineTuningJob)

    def list(self, after: Optional[str] = None, limit: Optional[int] = None) -> FineTuningJobList:
        return self.http.get(JOBS_PATH, FineTuningJobList, {"after": after, "limit": limit})

    def list_events(
        self, job_id: str, after: Optional[str] = None, limit: Optional[int] = None
    ) -> FineTuningEventList:
        return self.http.get(f"{JOBS_PATH}/{job_id}/events", FineTuningEventList, {"after": after, "limit": limit})

    def list_checkpoints(
        self, job_id: str, after: Optional[str] = None, limit: Optional[int] = None
    ) -> FineTuningCheckpointList:
        return self.http.get(
            f"{JOBS_PATH}/{job_id}/checkpoints", FineTuningCheckpointList, {"after": after, "limit": limit}
        )
