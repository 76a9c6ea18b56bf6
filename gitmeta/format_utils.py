"""
Output format utilities for gitmeta CLI commands.

Provides functions to format records as JSONL, JSON, YAML, CSV and TSV.
"""

import csv
import io
import json
import os
from typing import Any, Dict, Iterable, Iterator, List, Optional

import yaml

FORMATS = ('jsonl', 'json', 'yaml', 'csv', 'tsv')


def format_output(data: Iterable[Dict[str, Any]], format: str,
                  fields: Optional[List[str]] = None) -> Iterator[str]:
    """
    Format data according to the specified format.

    Args:
        data: Iterable of dictionaries to format
        format: Output format (jsonl, json, yaml, csv, tsv)
        fields: Optional list of fields to include (for CSV/TSV)

    Yields:
        Formatted strings for output
    """
    if format == "jsonl":
        for item in data:
            yield json.dumps(item, ensure_ascii=False)
    elif format == "json":
        yield json.dumps(list(data), ensure_ascii=False, indent=2)
    elif format == "yaml":
        yield yaml.safe_dump(list(data), default_flow_style=False, allow_unicode=True, sort_keys=False)
    elif format == "csv":
        yield from format_delimited(data, fields, ',')
    elif format == "tsv":
        yield from format_delimited(data, fields, '\t')
    else:
        raise ValueError(f"Unknown format: {format}")


def format_delimited(data: Iterable[Dict[str, Any]], fields: Optional[List[str]],
                     delimiter: str) -> Iterator[str]:
    """
    Format data as CSV or TSV with a header row.

    Nested values are flattened first. Without explicit fields, the columns
    are the sorted union of keys of all items.
    """
    rows = [flatten_dict(item) for item in data]
    if not rows:
        return

    if fields is None:
        all_fields: set[str] = set()
        for row in rows:
            all_fields.update(row.keys())
        fields = sorted(all_fields)

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=fields, delimiter=delimiter, extrasaction='ignore')
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    yield output.getvalue()


def flatten_dict(d: Dict[str, Any], parent_key: str = '', sep: str = '.') -> Dict[str, Any]:
    """
    Flatten a nested dictionary.

    Example:
        {'a': {'b': 1}, 'tags': ['x', 'y']} -> {'a.b': 1, 'tags': 'x, y'}
    """
    items: list[tuple[str, Any]] = []
    for k, v in d.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else k

        if isinstance(v, dict):
            items.extend(flatten_dict(v, new_key, sep=sep).items())
        elif isinstance(v, (list, tuple)):
            items.append((new_key, ', '.join(str(item) for item in v)))
        else:
            items.append((new_key, v))

    return dict(items)


def get_format_from_env(default: str = 'jsonl') -> str:
    """
    Get output format from the GITMETA_FORMAT environment variable.

    Unknown values fall back to the default.
    """
    format = os.environ.get('GITMETA_FORMAT', default).lower()
    if format not in FORMATS:
        return default
    return format
