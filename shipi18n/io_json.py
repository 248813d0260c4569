"""Read JSON documents and write translated locale files."""

import json
from pathlib import Path
from typing import Any, List, Optional

from shipi18n.results import JSONTranslationResult, Raw


def read_json_document(file_path: Path) -> Any:
    """
    Read a JSON document to translate.

    Args:
        file_path: Path to the JSON file

    Returns:
        Decoded JSON value

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"JSON file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def output_file_name(lang: str, stem: Optional[str] = None) -> str:
    """File name for a translated document: "es.json" or "<stem>.es.json"."""
    if stem:
        return f"{stem}.{lang}.json"
    return f"{lang}.json"


def write_translations(
    result: JSONTranslationResult,
    output_dir: Path,
    stem: Optional[str] = None
) -> List[Path]:
    """
    Write one file per translated language.

    Entries the service returned as undecodable text are written as-is;
    the warnings entry is never written.

    Args:
        result: Result of translate_json
        output_dir: Directory to write into (created if needed)
        stem: Optional file name prefix (e.g. the source file's stem)

    Returns:
        Paths written, in language order
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for lang in result.languages():
        file_path = output_dir / output_file_name(lang, stem)
        entry = result.entry(lang)

        with open(file_path, "w", encoding="utf-8") as f:
            if isinstance(entry, Raw):
                f.write(entry.text)
            else:
                json.dump(entry.value, f, ensure_ascii=False, indent=2)
                f.write("\n")

        written.append(file_path)

    return written
