"""Parse the collector's key<TAB>value lines into a dict."""
from typing import Dict


def parse_fields(text: str) -> Dict[str, str]:
    """Return key -> raw value. Lines without a tab are ignored; later lines
    overwrite earlier ones. Values are not trimmed here."""
    fields: Dict[str, str] = {}
    # Only \n ends a line; track names may contain other Unicode separators
    for line in text.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if not line:
            continue
        key, sep, value = line.partition("\t")
        if not sep:
            continue
        fields[key.strip()] = value
    return fields
