"""Client for listing, retrieving and deleting models."""

from openai_tools.common.client import BaseClient
from openai_tools.common.pagination import DeletedObject
from openai_tools.models.response import Model, ModelList

MODELS_PATH = "models"


class Models(BaseClient):
    def list(self) -> ModelList:
        return self.http.get(MODELS_PATH, ModelList)

    def retrieve(self, model_id: str) -> Model:
        return self.http.get(f"{MODELS_PATH}/{model_id}", Model)

    def delete(self, model_id: str) -> DeletedObject:
        """Delete a fine-tuned model owned by the organization."""
        return self.http.delete(f"{MODELS_PATH}/{model_id}", DeletedObject)
