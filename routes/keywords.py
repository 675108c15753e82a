"""Runtime view and replacement of the trigger phrases."""

from typing import Annotated

from fastapi import APIRouter, Depends

from dependencies import get_command_analyzer
from domain import CommandAnalyzer
from response_models import KeywordsRequest, KeywordsResponse

router = APIRouter(prefix="/keywords", tags=["keywords"])

AnalyzerDep = Annotated[CommandAnalyzer, Depends(get_command_analyzer)]


@router.get("", response_model=KeywordsResponse)
def get_keywords(analyzer: AnalyzerDep) -> KeywordsResponse:
    return KeywordsResponse(phrases=analyzer.trigger_phrases)


@router.put("", response_model=KeywordsResponse)
def set_keywords(body: KeywordsRequest, analyzer: AnalyzerDep) -> KeywordsResponse:
    """Replaces the trigger phrases until the process restarts."""
    analyzer.trigger_phrases = body.phrases
    return KeywordsResponse(phrases=analyzer.trigger_phrases)
