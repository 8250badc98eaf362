"""
Code generation demo schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional

from api.schemas.records import CodeGeneration


class GenerateRequest(BaseModel):
    prompt: str = Field(min_length=1)
    language: str = "Python"
    save: bool = True  # store in the user's history


class GeneratedCode(BaseModel):
    code: str
    explanation: str
    language: str
    template: str  # template key actually used
    is_fallback: bool


class GenerateResponse(BaseModel):
    generated: GeneratedCode
    saved: Optional[CodeGeneration] = None


class GenerationListResponse(BaseModel):
    generations: list[CodeGeneration]


class BookmarkRequest(BaseModel):
    is_bookmarked: bool
