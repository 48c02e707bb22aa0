"""Pydantic models for moderation results."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ModerationResult(BaseModel):
    """
    Verdict for one input.

    Category keys are the API's own names, which contain slashes
    (``hate/threatening``, ``self-harm/intent``, ``illicit/violent``, ...).
    """

    flagged: bool
    categories: Dict[str, Optional[bool]] = Field(default_factory=dict)
    category_scores: Dict[str, float] = Field(default_factory=dict)
    category_applied_input_types: Optional[Dict[str, List[str]]] = None

    def flagged_categories(self) -> List[str]:
        return sorted(name for name, hit in self.categories.items() if hit)


class ModerationResponse(BaseModel):
    id: str
    model: Optional[str] = None
    results: List[ModerationResult] = Field(default_factory=list)

    @property
    def flagged(self) -> bool:
        return any(result.flagged for result in self.results)
