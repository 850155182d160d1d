"""
Term-bank ingestion for Yomitan-format dictionaries (e.g. JMdict_english).

A dictionary is a directory or a .zip archive holding ``index.json`` and
``term_bank_1.json`` ... ``term_bank_N.json``. Each term bank is a JSON list
of rows:

    [term, reading, tags, rules, score, definitions, sequence, term_tags]

Definitions are plain strings, ``{"type": "text"}`` objects, or
``{"type": "structured-content"}`` trees that are flattened to text lines.
"""

import json
import logging
import re
import zipfile
from pathlib import Path
from typing import Any, Iterator

from lookup.dictionary import (
    DictionaryDefinition,
    DictionaryEntry,
    InMemoryDictionaryIndex,
)


logger = logging.getLogger(__name__)

TERM_BANK_PATTERN = re.compile(r"term_bank_(\d+)\.json$")

# Tag -> English part of speech
POS_TAGS = {
    "n": "noun",
    "v1": "ichidan verb",
    "v5": "godan verb",
    "v5u": "godan verb (u)",
    "v5k": "godan verb (ku)",
    "v5g": "godan verb (gu)",
    "v5s": "godan verb (su)",
    "v5t": "godan verb (tsu)",
    "v5n": "godan verb (nu)",
    "v5b": "godan verb (bu)",
    "v5m": "godan verb (mu)",
    "v5r": "godan verb (ru)",
    "vs": "suru verb",
    "vk": "kuru verb",
    "vz": "zuru verb",
    "adj-i": "i-adjective",
    "adj-na": "na-adjective",
    "adj-no": "no-adjective",
    "adv": "adverb",
    "prt": "particle",
    "conj": "conjunction",
    "int": "interjection",
    "pn": "pronoun",
    "suf": "suffix",
    "pref": "prefix",
    "exp": "expression",
    "vi": "intransitive",
    "vt": "transitive",
}


class TermBankError(ValueError):
    """A term bank or one of its rows is malformed."""


def extract_part_of_speech(tags: str) -> list[str]:
    """Map space-separated tags to English part-of-speech labels."""
    parts = []
    for tag in tags.split():
        # Numbered tags are entry markers, not grammar
        if tag.isdigit():
            continue
        if tag in POS_TAGS:
            parts.append(POS_TAGS[tag])
    return parts


def _extract_structured_text(content: Any) -> list[str]:
    """Recursively collect text lines from structured content."""
    if isinstance(content, str):
        return [content]

    if isinstance(content, list):
        texts = []
        for item in content:
            texts.extend(_extract_structured_text(item))
        return texts

    if isinstance(content, dict):
        data = content.get("data")
        # Cross-reference links
        if isinstance(data, dict) and data.get("content") == "references":
            return []
        # li/ul/ol/span/div all just wrap their content
        if content.get("content"):
            return _extract_structured_text(content["content"])

    return []


def extract_glossary(definition: Any) -> list[str]:
    """Extract glossary lines from one term-bank definition."""
    if isinstance(definition, str):
        return [definition]

    if isinstance(definition, dict):
        match definition.get("type"):
            case "text":
                return [definition.get("text", "")]
            case "structured-content":
                return _extract_structured_text(definition.get("content"))

    return []


def parse_definitions(definitions: list[Any], tags: str) -> list[DictionaryDefinition]:
    part_of_speech = extract_part_of_speech(tags)
    result = []
    for definition in definitions:
        glossary = extract_glossary(definition)
        if glossary:
            result.append(DictionaryDefinition(glossary=glossary, part_of_speech=part_of_speech))
    return result


def parse_term_bank_entry(row: list[Any]) -> DictionaryEntry | None:
    """
    Convert one term-bank row into a DictionaryEntry.

    Returns:
        The entry, or None for form-reference stubs and rows without any
        usable definition.

    Raises:
        TermBankError: If the row has fewer than seven fields or a
            non-numeric score or sequence.
    """
    if not isinstance(row, list) or len(row) < 7:
        raise TermBankError(f"Malformed term bank row: {row!r}")

    term, reading, tags, rules, score, definitions, sequence = row[:7]

    # Form references carry no definitions of their own
    if tags == "forms":
        return None

    parsed = parse_definitions(definitions or [], tags or "")
    if not parsed:
        return None

    try:
        score = int(score or 0)
        sequence = int(sequence)
    except (TypeError, ValueError) as e:
        raise TermBankError(f"Bad score or sequence in row: {row!r}") from e

    return DictionaryEntry(
        term=term,
        reading=reading or term,  # kana-only words have no separate reading
        tags=tags or "",
        rules=rules or "",
        score=score,
        sequence=sequence,
        definitions=parsed,
    )


def parse_term_bank(rows: list[Any]) -> list[DictionaryEntry]:
    if not isinstance(rows, list):
        raise TermBankError("Term bank must be a JSON list")
    entries = []
    for row in rows:
        entry = parse_term_bank_entry(row)
        if entry is not None:
            entries.append(entry)
    return entries


def _read_json(data: bytes | str, source: str) -> Any:
    try:
        return json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TermBankError(f"Invalid JSON in {source}: {e}") from e


def load_term_bank_file(path: Path | str) -> list[DictionaryEntry]:
    """Load and parse a single term_bank_N.json file."""
    return parse_term_bank(_read_json(Path(path).read_bytes(), str(path)))


def _bank_number(name: str) -> int | None:
    match = TERM_BANK_PATTERN.search(name)
    return int(match.group(1)) if match else None


def iter_term_banks(path: Path | str) -> Iterator[tuple[str, list[DictionaryEntry]]]:
    """
    Yield (bank name, entries) for each term bank, in numeric order.

    Args:
        path: Dictionary directory or .zip archive.
    """
    path = Path(path)

    if path.suffix == ".zip":
        try:
            with zipfile.ZipFile(path) as zf:
                names = [n for n in zf.namelist() if _bank_number(n) is not None]
                for name in sorted(names, key=_bank_number):
                    yield name, parse_term_bank(_read_json(zf.read(name), f"{path}:{name}"))
        except zipfile.BadZipFile as e:
            raise TermBankError(f"Not a valid zip archive: {path}") from e
        return

    if not path.is_dir():
        raise FileNotFoundError(f"Dictionary not found: {path}")

    files = [f for f in path.glob("term_bank_*.json") if _bank_number(f.name) is not None]
    for file in sorted(files, key=lambda f: _bank_number(f.name)):
        yield file.name, load_term_bank_file(file)


def read_index_metadata(path: Path | str) -> dict[str, Any]:
    """Read index.json (title, revision, format) from a dictionary."""
    path = Path(path)

    if path.suffix == ".zip":
        try:
            with zipfile.ZipFile(path) as zf:
                index_files = [n for n in zf.namelist() if n.endswith("index.json")]
                if not index_files:
                    raise TermBankError(f"No index.json in {path}")
                return _read_json(zf.read(index_files[0]), f"{path}:{index_files[0]}")
        except zipfile.BadZipFile as e:
            raise TermBankError(f"Not a valid zip archive: {path}") from e

    index_path = path / "index.json"
    if not index_path.exists():
        raise TermBankError(f"No index.json in {path}")
    return _read_json(index_path.read_bytes(), str(index_path))


def needs_reload(index: InMemoryDictionaryIndex, path: Path | str) -> bool:
    """Check whether the index is empty or holds a different revision."""
    revision = read_index_metadata(path).get("revision")
    return not index.is_loaded or index.version != revision


def load_dictionary(
    path: Path | str,
    index: InMemoryDictionaryIndex | None = None,
) -> InMemoryDictionaryIndex:
    """
    Load every term bank under ``path`` into an index.

    Banks are read into a fresh index first. ``index`` is only replaced once
    every bank has parsed, so a failed load leaves it untouched.

    Raises:
        TermBankError: If index.json or any term bank is missing or malformed.
    """
    path = Path(path)
    metadata = read_index_metadata(path)
    logger.info("Loading dictionary %s from %s", metadata.get("title", "?"), path)

    staged = InMemoryDictionaryIndex()
    for name, entries in iter_term_banks(path):
        staged.add_entries(entries)
        logger.info("  %s: %d entries", name, len(entries))
    staged.version = metadata.get("revision")

    if index is None:
        index = staged
    else:
        index.replace_contents(staged)

    logger.info("Loaded %d entries (revision %s)", len(index), index.version)
    return index
