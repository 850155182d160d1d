"""Word Lookup FastAPI application - Japanese dictionary lookup API."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from models import (
    BestLookupResponse,
    CandidateResponse,
    DeinflectRequest,
    DeinflectResponse,
    LookupRequest,
    LookupResponse,
    LookupResultResponse,
    PositionLookupRequest,
    PositionLookupResponse,
    SubstringLookupRequest,
    TokenResponse,
)
from lookup.config import LOG_LEVEL, find_dictionary_path
from lookup.deinflector import deinflect, most_likely_dictionary_form
from lookup.dictionary import DictionaryError, DictionaryIndex, InMemoryDictionaryIndex
from lookup.resolver import (
    LookupResult,
    lookup_word,
    lookup_word_best,
    lookup_word_with_substrings,
)
from lookup.termbank import TermBankError, load_dictionary, needs_reload
from lookup.tokenizer import SudachiTokenizer, Tokenizer, lookup_at_position


VERSION = "0.3.0"

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

_index = InMemoryDictionaryIndex()


def get_index() -> DictionaryIndex:
    return _index


def get_tokenizer() -> Tokenizer:
    try:
        return SudachiTokenizer.get_instance()
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Tokenizer unavailable: {e!s}") from e


async def _load_dictionary(path) -> None:
    if not needs_reload(_index, path):
        logger.info("Dictionary revision %s already loaded", _index.version)
        return
    await asyncio.to_thread(load_dictionary, path, _index)


# ============================================================================
# Application Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the dictionary and tokenizer on startup."""
    path = find_dictionary_path()
    if path is None:
        logger.warning("No dictionary found; lookups will fail until one is loaded")
    else:
        try:
            await _load_dictionary(path)
        except (OSError, TermBankError):
            logger.exception("Failed to load dictionary from %s", path)

    if get_tokenizer not in app.dependency_overrides:
        await asyncio.to_thread(SudachiTokenizer.get_instance)
    yield


# ============================================================================
# FastAPI Application
# ============================================================================


app = FastAPI(
    title="Word Lookup API",
    description="""Japanese dictionary lookup for readers.

## Features
- **Deinflection**: Walk conjugated forms back to dictionary forms
- **Lookup**: Resolve a word against JMdict with grammar checks
- **Longest match**: Find the longest word starting at a position in text
- **Reading hints**: Prefer the homograph matching a tokenizer's reading

## Endpoints
- `/deinflect` - Candidate dictionary forms of a word
- `/lookup` - Ranked dictionary matches
- `/lookup_best` - Single best match
- `/lookup_substrings` - Longest-match lookup in running text
- `/lookup_at` - Word under a click position (tokenized with Sudachi)
""",
    version=VERSION,
    lifespan=lifespan,
)


# ============================================================================
# Middleware
# ============================================================================


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _to_response(result: LookupResult) -> LookupResultResponse:
    return LookupResultResponse(
        selected_word=result.selected_word,
        dictionary_form=result.dictionary_form,
        reading=result.reading,
        part_of_speech=result.part_of_speech,
        definitions=result.definitions,
        inflection_path=result.inflection_path,
        score=result.score,
        sequence=result.sequence,
        match_length=result.match_length,
    )


def _results_response(results: list[LookupResult]) -> LookupResponse:
    return LookupResponse(results=[_to_response(r) for r in results], count=len(results))


# ============================================================================
# Health Endpoints
# ============================================================================


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "service": "wordlookup", "version": VERSION}


@app.get("/health", tags=["Health"])
async def health(index: DictionaryIndex = Depends(get_index)) -> dict:
    """Detailed health check."""
    loaded = getattr(index, "is_loaded", True)
    return {
        "status": "healthy" if loaded else "degraded",
        "version": VERSION,
        "dictionary_version": getattr(index, "version", None),
        "entries": len(index) if hasattr(index, "__len__") else None,
    }


# ============================================================================
# Deinflection Endpoints
# ============================================================================


@app.post("/deinflect", response_model=DeinflectResponse, tags=["Deinflection"])
async def deinflect_endpoint(request: DeinflectRequest) -> DeinflectResponse:
    """
    List every candidate dictionary form of a word.

    The word itself comes first, followed by forms in the order they were
    derived, e.g. 食べなかった -> 食べる (past negative).
    """
    candidates = deinflect(request.word)
    return DeinflectResponse(
        word=request.word,
        candidates=[
            CandidateResponse(
                term=c.term,
                grammar=[str(g) for g in c.grammar_chain],
                reasons=list(c.reason_chain),
            )
            for c in candidates
        ],
        most_likely=most_likely_dictionary_form(candidates),
    )


# ============================================================================
# Lookup Endpoints
# ============================================================================


@app.post("/lookup", response_model=LookupResponse, tags=["Lookup"])
async def lookup_endpoint(
    request: LookupRequest,
    index: DictionaryIndex = Depends(get_index),
) -> LookupResponse:
    """
    Look up a word, trying every deinflected form.

    Results whose reading matches `reading_hint` come first, then the rest
    by frequency score.
    """
    try:
        return _results_response(await lookup_word(index, request.word, request.reading_hint))
    except DictionaryError as e:
        raise HTTPException(status_code=503, detail=f"Dictionary unavailable: {e!s}") from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lookup failed: {e!s}") from e


@app.post("/lookup_best", response_model=BestLookupResponse, tags=["Lookup"])
async def lookup_best_endpoint(
    request: LookupRequest,
    index: DictionaryIndex = Depends(get_index),
) -> BestLookupResponse:
    """Return only the top ranked match, or null."""
    try:
        result = await lookup_word_best(index, request.word, request.reading_hint)
    except DictionaryError as e:
        raise HTTPException(status_code=503, detail=f"Dictionary unavailable: {e!s}") from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lookup failed: {e!s}") from e
    return BestLookupResponse(result=_to_response(result) if result else None)


@app.post("/lookup_substrings", response_model=LookupResponse, tags=["Lookup"])
async def lookup_substrings_endpoint(
    request: SubstringLookupRequest,
    index: DictionaryIndex = Depends(get_index),
) -> LookupResponse:
    """
    Longest-match lookup starting at `start_index`.

    Japanese has no spaces, so every prefix up to `max_length` characters is
    tried and longer matches are ranked first.
    """
    if request.start_index >= len(request.text):
        raise HTTPException(status_code=400, detail="start_index is past the end of text")
    try:
        results = await lookup_word_with_substrings(
            index,
            request.text,
            request.start_index,
            request.max_length,
            request.reading_hint,
        )
    except DictionaryError as e:
        raise HTTPException(status_code=503, detail=f"Dictionary unavailable: {e!s}") from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lookup failed: {e!s}") from e
    return _results_response(results)


@app.post("/lookup_at", response_model=PositionLookupResponse, tags=["Lookup"])
async def lookup_at_endpoint(
    request: PositionLookupRequest,
    index: DictionaryIndex = Depends(get_index),
    tokenizer: Tokenizer = Depends(get_tokenizer),
) -> PositionLookupResponse:
    """
    Look up the word under a click position in a paragraph.

    The sentence around `offset` is tokenized and the token's base form is
    looked up with its reading as hint.
    """
    try:
        found = await lookup_at_position(index, tokenizer, request.text, request.offset)
    except DictionaryError as e:
        raise HTTPException(status_code=503, detail=f"Dictionary unavailable: {e!s}") from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lookup failed: {e!s}") from e

    if found is None:
        return PositionLookupResponse()

    token, results = found
    return PositionLookupResponse(
        token=TokenResponse(surface=token.surface, base=token.base_form, reading=token.reading),
        results=[_to_response(r) for r in results],
        count=len(results),
    )


# ============================================================================
# CLI Entry Point
# ============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
