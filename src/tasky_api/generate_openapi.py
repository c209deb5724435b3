"""
Utility script to generate and write the OpenAPI schema for the Tasky API.

This script builds the FastAPI application and serializes its OpenAPI schema
to a JSON file so that API clients and documentation tools can consume a
stable description without running the server or a database.

Usage:
    python -m src.tasky_api.generate_openapi [output_path]

Notes:
- The default output path is interfaces/openapi.json under the repository root.
- Tags declared in main.openapi_tags are added when missing from the schema.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from .main import create_app, openapi_tags

logger = logging.getLogger(__name__)


def _default_output_path() -> str:
    script_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))  # points to .../src
    repo_root = os.path.dirname(script_dir)
    return os.path.join(repo_root, "interfaces", "openapi.json")


def _ensure_tags(schema: Dict[str, Any]) -> None:
    """
    Ensure the OpenAPI schema contains the declared tags metadata. Existing tag
    definitions are left alone.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in openapi_tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


# PUBLIC_INTERFACE
def generate_openapi(out_path: Optional[str] = None) -> str:
    """Generate the OpenAPI schema file and return the written file path."""
    out_path = out_path or _default_output_path()
    # Schema generation never runs the lifespan, so no database is contacted.
    schema = create_app().openapi()
    _ensure_tags(schema)

    os.makedirs(os.path.dirname(os.path.abspath(out_path)), exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    logger.info("Wrote OpenAPI schema to %s", out_path)
    return out_path


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    path = generate_openapi(args[0] if args else None)
    print(f"Wrote OpenAPI schema to: {path}")


if __name__ == "__main__":
    main()
