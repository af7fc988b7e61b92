"""Text-to-structure loading for submitted API documents.

YAML is a superset of JSON, so a single PyYAML safe load handles both input
formats.  The loaded tree is normalised to a JSON-compatible tree before it is
handed to the validator: mapping keys become strings (``200:`` turns into
``"200"``) and non-JSON scalars such as dates become their string form.

Normalising copies every aliased node, so the composed node graph is sized
before anything is constructed and documents that would expand past
``MAX_EXPANDED_NODES`` are refused.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from src.shared.constants import MAX_EXPANDED_NODES
from src.shared.errors import ArtifactIOError, DocumentSyntaxError

logger = logging.getLogger(__name__)


class _DocumentLoader(yaml.SafeLoader):
    """SafeLoader that bounds the size of the alias-expanded document."""

    def construct_document(self, node: yaml.Node) -> Any:
        _check_expanded_size(node)
        return super().construct_document(node)


def _check_expanded_size(root: yaml.Node) -> None:
    sizes: dict[int, int] = {}
    in_progress: set[int] = set()

    def _size(node: yaml.Node) -> int:
        key = id(node)
        if key in sizes:
            return sizes[key]
        if key in in_progress:
            raise DocumentSyntaxError(
                f"Recursive alias{_mark(node)} cannot be represented as JSON"
            )
        in_progress.add(key)
        total = 1
        if isinstance(node, yaml.MappingNode):
            for key_node, value_node in node.value:
                total += _size(key_node) + _size(value_node)
        elif isinstance(node, yaml.SequenceNode):
            for item in node.value:
                total += _size(item)
        in_progress.discard(key)
        if total > MAX_EXPANDED_NODES:
            raise DocumentSyntaxError(
                f"Document expands to more than {MAX_EXPANDED_NODES} nodes "
                f"through aliases{_mark(node)}"
            )
        sizes[key] = total
        return total

    _size(root)


def _mark(node: yaml.Node) -> str:
    mark = node.start_mark
    if mark is None:
        return ""
    return f" at line {mark.line + 1}, column {mark.column + 1}"


def _load(stream: Any) -> Any:
    return yaml.load(stream, Loader=_DocumentLoader)  # noqa: S506 - SafeLoader subclass


def load_document(text: str) -> Any:
    """Parse YAML or JSON *text* into a plain mapping/sequence/scalar tree.

    Raises:
        DocumentSyntaxError: with PyYAML's diagnostic, which carries the
            ``line N, column M`` of the problem.
    """
    try:
        loaded = _load(text)
    except yaml.YAMLError as exc:
        raise DocumentSyntaxError(str(exc)) from exc
    return _to_json_tree(loaded)


def load_document_file(path: Path, encoding: str = "utf-8") -> Any:
    """Parse a staged document from *path*, reading it with *encoding*."""
    try:
        with open(path, encoding=encoding) as fh:
            loaded = _load(fh)
    except yaml.YAMLError as exc:
        raise DocumentSyntaxError(str(exc)) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ArtifactIOError(f"Could not read staged document: {exc}") from exc
    return _to_json_tree(loaded)


def _to_json_tree(loaded: Any) -> Any:
    # json handles int/bool/None keys; default=str covers dates and binary.
    # .nan and .inf have no JSON form and are refused rather than nulled.
    try:
        return json.loads(json.dumps(loaded, default=str, allow_nan=False))
    except ValueError as exc:
        raise DocumentSyntaxError(
            "Document contains a value with no JSON representation "
            f"(.nan or .inf): {exc}"
        ) from exc
