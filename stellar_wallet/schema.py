"""
JSON schemas for the Horizon responses the client reads.

Only the fields the client depends on are constrained; Horizon adds
fields freely.
"""

from __future__ import annotations

from typing import Any, Dict

import jsonschema  # type: ignore[import-untyped]

ACCOUNT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["account_id", "sequence"],
    "properties": {
        "account_id": {"type": "string", "minLength": 1},
        "sequence": {"type": "string", "pattern": "^[0-9]+$"},
    },
}

TRANSACTION_SUCCESS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["hash"],
    "properties": {
        "hash": {"type": "string", "pattern": "^[0-9a-f]{64}$"},
        "ledger": {"type": "integer"},
        "successful": {"type": "boolean"},
    },
}

PROBLEM_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["status"],
    "properties": {
        "type": {"type": "string"},
        "title": {"type": "string"},
        "status": {"type": "integer"},
        "detail": {"type": "string"},
        "extras": {
            "type": "object",
            "properties": {
                "result_codes": {
                    "type": "object",
                    "properties": {
                        "transaction": {"type": "string"},
                        "operations": {"type": "array", "items": {"type": "string"}},
                    },
                },
            },
        },
    },
}


def validate(instance: Dict[str, Any], schema: Dict[str, Any]) -> None:
    jsonschema.validate(instance=instance, schema=schema)


def is_valid(instance: Dict[str, Any], schema: Dict[str, Any]) -> bool:
    try:
        validate(instance, schema)
    except jsonschema.ValidationError:
        return False
    return True
