"""Console output for translation results."""

import json
from typing import Any, Dict, List, Mapping

from shipi18n.results import JSONTranslationResult


def print_text_result(result: Mapping[str, Any]) -> None:
    """
    Print text translations, one block per language.

    Args:
        result: Text translation result from translate()
    """
    for lang, pairs in result.items():
        print("\n" + "=" * 60)
        print(f"Translation: {lang}")
        print("=" * 60)
        if not isinstance(pairs, list):
            print(f"  {pairs}")
            continue
        for pair in pairs:
            print(f"  {pair.get('original', '')}")
            print(f"  → {pair.get('translated', '')}")


def print_comparison(
    with_placeholders: Mapping[str, Any],
    without_placeholders: Mapping[str, Any]
) -> None:
    """Print translations made with and without placeholder preservation side by side."""
    for lang, pairs in with_placeholders.items():
        other = without_placeholders.get(lang) or []
        print("\n" + "=" * 60)
        print(f"Placeholder comparison: {lang}")
        print("=" * 60)
        for index, pair in enumerate(pairs):
            print(f"  Original:     {pair.get('original', '')}")
            print(f"  Preserved:    {pair.get('translated', '')}")
            if index < len(other):
                print(f"  Unprotected:  {other[index].get('translated', '')}")


def print_placeholder_issues(issues: List[Dict[str, Any]]) -> None:
    """Print issues found by find_placeholder_issues."""
    if not issues:
        print("✓ All placeholders preserved")
        return

    print(f"✗ {len(issues)} segment(s) changed placeholders:")
    for issue in issues:
        details = []
        if issue["missing"]:
            details.append("missing " + ", ".join(sorted(issue["missing"])))
        if issue["extra"]:
            details.append("extra " + ", ".join(sorted(issue["extra"])))
        print(f"  [{issue['language']}#{issue['index']}] {'; '.join(details)}")


def print_json_result(result: JSONTranslationResult) -> None:
    """Print translated documents and any warnings."""
    for lang in result.languages():
        print("\n" + "=" * 60)
        print(f"Translation: {lang}")
        print("=" * 60)
        value = result[lang]
        if lang in result.raw_languages():
            print("(not valid JSON, shown as returned)")
            print(value)
        else:
            print(json.dumps(value, ensure_ascii=False, indent=2))

    messages = result.warning_messages()
    if messages:
        print("\nWarnings:")
        for message in messages:
            print(f"  ⚠ {message}")
