# src/bwdedup/common/exporter.py

import json
from pathlib import Path
from typing import Any, Dict, List

from .errors import ExportFormatError, ExportReadError, ExportWriteError


def default_output_path(input_path: Path) -> Path:
    """export.json -> export.dedup.json, next to the input."""
    return input_path.with_name(f"{input_path.stem}.dedup.json")


def load_export(path: Path) -> Dict[str, Any]:
    """
    Read a Bitwarden JSON export.

    The root must be an object carrying an ``items`` list; every other key
    (folders, collections, encrypted...) is kept as-is for writing back.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ExportReadError(f"Failed to read input file {path}: {e}") from e

    try:
        root = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExportReadError(f"Failed to parse JSON from {path}: {e}") from e
    except RecursionError as e:
        raise ExportReadError(f"Failed to parse JSON from {path}: nesting too deep") from e

    if not isinstance(root, dict) or not isinstance(root.get("items"), list):
        raise ExportFormatError("Expected top-level 'items' array in Bitwarden export")
    return root


class ExportWriter:
    """Serialize the deduplicated export, compact or pretty."""

    def __init__(self, pretty: bool = False):
        self.pretty = pretty

    def dumps(self, root: Dict[str, Any]) -> str:
        if self.pretty:
            return json.dumps(root, indent=2, ensure_ascii=False)
        return json.dumps(root, separators=(",", ":"), ensure_ascii=False)

    def write(self, root: Dict[str, Any], items: List[Any], path: Path) -> Dict[str, Any]:
        """Replace ``items`` in ``root`` and write it to ``path``. Returns the new root."""
        output = {**root, "items": items}
        try:
            data = self.dumps(output).encode("utf-8")
        except UnicodeEncodeError as e:
            raise ExportWriteError(f"Cannot encode output for {path}: {e}") from e

        # encode before opening so a failure leaves an existing file intact
        try:
            path.write_bytes(data)
        except OSError as e:
            raise ExportWriteError(f"Failed to write output file {path}: {e}") from e
        return output
