"""Pydantic models for fine-tuning jobs."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from openai_tools.common.pagination import Page


class Hyperparameters(BaseModel):
    n_epochs: Optional[Union[int, str]] = None
    batch_size: Optional[Union[int, str]] = None
    learning_rate_multiplier: Optional[Union[float, str]] = None
    beta: Optional[Union[float, str]] = None


class MethodDetails(BaseModel):
    hyperparameters: Optional[Hyperparameters] = None


class Method(BaseModel):
    type: str
    supervised: Optional[MethodDetails] = None
    dpo: Optional[MethodDetails] = None


class FineTuningJobError(BaseModel):
    code: Optional[str] = None
    message: Optional[str] = None
    param: Optional[str] = None


class FineTuningJob(BaseModel):
    id: str
    object: str = "fine_tuning.job"
    model: str
    status: str
    created_at: Optional[int] = None
    finished_at: Optional[int] = None
    fine_tuned_model: Optional[str] = None
    organization_id: Optional[str] = None
    result_files: List[str] = []
    training_file: Optional[str] = None
    validation_file: Optional[str] = None
    trained_tokens: Optional[int] = None
    seed: Optional[int] = None
    estimated_finish: Optional[int] = None
    error: Optional[FineTuningJobError] = None
    method: Optional[Method] = None
    hyperparameters: Optional[Hyperparameters] = None
    metadata: Optional[Dict[str, str]] = None


class FineTuningJobEvent(BaseModel):
    id: str
    object: str = "fine_tuning.job.event"
    created_at: Optional[int] = None
    level: Optional[str] = None
    message: str = ""
    type: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class FineTuningCheckpoint(BaseModel):
    id: str
    object: str = "fine_tuning.job.checkpoint"
    created_at: Optional[int] = None
    fine_tuned_model_checkpoint: Optional[str] = None
    fine_tuning_job_id: Optional[str] = None
    step_number: Optional[int] = None
    metrics: Optional[Dict[str, float]] = None


class FineTuningJobList(Page[FineTuningJob]):
    pass


class FineTuningEventList(Page[FineTuningJobEvent]):
    pass


class FineTuningCheckpointList(Page[FineTuningCheckpoint]):
    pass
