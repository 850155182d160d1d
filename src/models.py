"""Pydantic models for Word Lookup API requests and responses."""

from pydantic import BaseModel, Field


# ============================================================================
# Request Models
# ============================================================================


class DeinflectRequest(BaseModel):
    """Request body for deinflection."""
    word: str = Field(..., max_length=100, description="Conjugated word to deinflect")


class LookupRequest(BaseModel):
    """Request body for word lookup."""
    word: str = Field(..., min_length=1, max_length=100, description="Word as written")
    reading_hint: str | None = Field(None, description="Reading from a tokenizer (kana)")


class SubstringLookupRequest(BaseModel):
    """Request body for longest-match lookup in running text."""
    text: str = Field(..., min_length=1, max_length=10000, description="Japanese text")
    start_index: int = Field(..., ge=0, description="Position of the first character")
    max_length: int = Field(20, ge=1, le=50, description="Longest substring to try")
    reading_hint: str | None = Field(None, description="Reading from a tokenizer (kana)")


class PositionLookupRequest(BaseModel):
    """Request body for looking up the word under a click position."""
    text: str = Field(..., min_length=1, max_length=10000, description="Paragraph text")
    offset: int = Field(..., ge=0, description="Clicked character offset")


# ============================================================================
# Response Components
# ============================================================================


class CandidateResponse(BaseModel):
    """Single deinflection candidate."""
    term: str = Field(..., description="Candidate dictionary form")
    grammar: list[str] = Field(default_factory=list, description="Grammar classes, e.g. v1, v5")
    reasons: list[str] = Field(default_factory=list, description="Transformations, e.g. negative")


class LookupResultResponse(BaseModel):
    """Single dictionary match."""
    selected_word: str = Field(..., description="Word that was looked up")
    dictionary_form: str = Field(..., description="Dictionary form (entry term)")
    reading: str = Field(..., description="Reading in kana")
    part_of_speech: list[str] = Field(default_factory=list)
    definitions: list[str] = Field(default_factory=list, description="English glosses")
    inflection_path: list[str] = Field(default_factory=list, description="How the word was conjugated")
    score: int = Field(..., description="Frequency score, higher is more common")
    sequence: int = Field(..., description="Dictionary entry id")
    match_length: int | None = Field(None, description="Matched characters (substring lookup)")


class TokenResponse(BaseModel):
    """Token under a click position."""
    surface: str
    base: str
    reading: str


# ============================================================================
# Response Models
# ============================================================================


class DeinflectResponse(BaseModel):
    """Response for /deinflect."""
    word: str
    candidates: list[CandidateResponse]
    most_likely: str = Field(..., description="Candidate with fewest transformations")


class LookupResponse(BaseModel):
    """Response for /lookup and /lookup_substrings."""
    results: list[LookupResultResponse]
    count: int


class BestLookupResponse(BaseModel):
    """Response for /lookup_best."""
    result: LookupResultResponse | None = None


class PositionLookupResponse(BaseModel):
    """Response for /lookup_at."""
    token: TokenResponse | None = None
    results: list[LookupResultResponse] = Field(default_factory=list)
    count: int = 0
