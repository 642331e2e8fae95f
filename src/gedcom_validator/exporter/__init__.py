"""
Exporter package.

Re-exports the JSON export entry points used by the pipeline and the CLI.
"""

from __future__ import annotations

from .json_exporter import build_store_dict, export_store_json, serialize_store_to_json_string

__all__ = ["build_store_dict", "export_store_json", "serialize_store_to_json_string"]
