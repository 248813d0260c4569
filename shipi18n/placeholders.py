"""Detect placeholders and check that translations preserve them."""

import re
from collections import Counter
from typing import Any, Dict, List, Mapping, Tuple

# Order matters: double braces are matched before single braces
DOUBLE_BRACE_PATTERN = re.compile(r'\{\{.*?\}\}')
ICU_PATTERN = re.compile(r'\{\s*([\w.]+)[^{}]*(?:\{[^{}]*\}[^{}]*)*\}')
PRINTF_PATTERN = re.compile(r'%(?:\d+\$)?[-+0#]*\d*(?:\.\d+|\.\*)?[sdifxXoecgu@]')
TAG_PATTERN = re.compile(r'</?[A-Za-z][\w-]*(?:\s[^<>]*)?/?>')


def _blank(text: str, match: re.Match) -> str:
    return text[:match.start()] + " " * (match.end() - match.start()) + text[match.end():]


def extract_placeholders(text: str) -> Counter:
    """
    Extract placeholders from a string, with their counts.

    Supports:
    - {{name}} (double braces)
    - {name}, {0}, {count, plural, one {# item} other {# items}} (ICU,
      reduced to the argument name, e.g. "{count}")
    - %s, %d, %1$s, %.2f (printf-style)
    - <b>, </b>, <br/> (markup tags)

    Args:
        text: String to analyze

    Returns:
        Counter mapping placeholder strings to their counts
        Example: Counter({"{name}": 1, "%s": 2})
    """
    placeholders: Counter = Counter()

    if not text:
        return placeholders

    remaining = text
    for match in reversed(list(DOUBLE_BRACE_PATTERN.finditer(remaining))):
        placeholders[match.group(0)] += 1
        remaining = _blank(remaining, match)

    for match in reversed(list(ICU_PATTERN.finditer(remaining))):
        placeholders["{" + match.group(1) + "}"] += 1
        remaining = _blank(remaining, match)

    for match in PRINTF_PATTERN.finditer(remaining):
        placeholders[match.group(0)] += 1

    for match in TAG_PATTERN.finditer(remaining):
        placeholders[match.group(0)] += 1

    return placeholders


def check_placeholders(original: str, translated: str) -> Tuple[bool, Dict[str, Dict[str, int]]]:
    """
    Check that a translation kept every placeholder of the original.

    Args:
        original: Source string
        translated: Translated string

    Returns:
        Tuple of (is_valid: bool, diff: dict)
        diff contains:
        - "missing": placeholders in original but not in translated (or fewer)
        - "extra": placeholders in translated but not in original (or more)
    """
    source_tokens = extract_placeholders(original)
    translated_tokens = extract_placeholders(translated)

    missing = source_tokens - translated_tokens
    extra = translated_tokens - source_tokens

    diff = {
        "missing": dict(missing),
        "extra": dict(extra),
    }
    return not missing and not extra, diff


def find_placeholder_issues(result: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Find translated segments that lost or gained placeholders.

    Args:
        result: Text translation result keyed by language code, each
            value a list of {"original", "translated"} pairs

    Returns:
        List of issues:
        [{"language": "es", "index": 0, "original": ..., "translated": ...,
          "missing": {...}, "extra": {...}}]
    """
    issues = []

    for lang, pairs in result.items():
        if not isinstance(pairs, list):
            continue
        for index, pair in enumerate(pairs):
            if not isinstance(pair, dict):
                continue
            original = pair.get("original") or ""
            translated = pair.get("translated") or ""
            is_valid, diff = check_placeholders(original, translated)
            if is_valid:
                continue
            issues.append({
                "language": lang,
                "index": index,
                "original": original,
                "translated": translated,
                "missing": diff["missing"],
                "extra": diff["extra"],
            })

    return issues
