"""Shaping requests for the classification oracle and parsing its answers.

The oracle answers with JSON, sometimes wrapped in Markdown code fences.
Answers whose overall shape is wrong raise OracleError; individual entries
that cannot be used are dropped, leaving the fallback policy to handle them.
"""

import json
import re
from typing import Any, Optional, Sequence

import structlog

from ledgerflow.domain.entities import (
    ClassificationEntry,
    ClassificationGuidance,
    ClassificationMapping,
    ColumnMapping,
    RawLine,
)
from ledgerflow.domain.errors import OracleError, malformed_oracle_payload
from ledgerflow.domain.taxonomy import canonical_guidance_text, parse_section
from ledgerflow.utils.amount_parser import parse_lenient_amount

logger = structlog.get_logger(__name__)

CLASSIFICATION_LINE_LIMIT = 500
MIN_GUIDANCE_LENGTH = 10

_CODE_FENCE = re.compile(r"```(?:json)?")

_MAPPING_KEYS = {
    "code_index": "codeIndex",
    "name_index": "nameIndex",
    "debit_index": "debitIndex",
    "credit_index": "creditIndex",
    "balance_index": "balanceIndex",
}


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences around a JSON answer."""
    return _CODE_FENCE.sub("", text).strip()


def load_json(payload: Any, what: str) -> Any:
    """Decode a JSON answer; already-decoded payloads pass through."""
    if not isinstance(payload, (str, bytes)):
        return payload
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise OracleError(malformed_oracle_payload(what, f"not UTF-8 text ({e.reason})")) from e
    try:
        return json.loads(strip_code_fences(payload))
    except json.JSONDecodeError as e:
        raise OracleError(malformed_oracle_payload(what, f"invalid JSON ({e.msg})")) from e


def _optional_index(data: dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise OracleError(malformed_oracle_payload("column mapping", f"'{key}' is not an integer"))
    return value if value > -1 else None


def parse_column_mapping(payload: Any) -> ColumnMapping:
    """Parse a column mapping answer.

    Expected shape: {"codeIndex", "nameIndex", "debitIndex", "creditIndex",
    "balanceIndex", "startRow"}, with -1 (or a missing key) for absent
    columns.
    """
    data = load_json(payload, "column mapping")
    if not isinstance(data, dict):
        raise OracleError(malformed_oracle_payload("column mapping", "expected a JSON object"))

    indexes = {field: _optional_index(data, key) for field, key in _MAPPING_KEYS.items()}
    start_row = _optional_index(data, "startRow") or 0

    return ColumnMapping(start_row=start_row, **indexes)


def parse_classification(payload: Any) -> ClassificationMapping:
    """Parse a classification answer into a mapping keyed by line index.

    Expected shape: a list of {"id", "type", "category", "isGroup"}. Entries
    without an integer id are ignored; unknown section labels fall back to
    Unclassified, a missing category is left empty for the merger to
    default, and an isGroup that is not a JSON boolean counts as false.
    """
    data = load_json(payload, "classification")
    if not isinstance(data, list):
        raise OracleError(malformed_oracle_payload("classification", "expected a JSON array"))

    mapping: ClassificationMapping = {}
    for item in data:
        if not isinstance(item, dict):
            continue
        index = item.get("id")
        if isinstance(index, bool) or not isinstance(index, int):
            logger.warning("Ignoring classification entry without index", entry=item)
            continue
        is_group = item.get("isGroup", False)
        if not isinstance(is_group, bool):
            logger.warning("Treating non-boolean isGroup as false", entry=item)
            is_group = False
        mapping[index] = ClassificationEntry(
            section=parse_section(item.get("type")),
            category=str(item.get("category") or "").strip(),
            is_group=is_group,
        )
    return mapping


def parse_extracted_lines(payload: Any) -> list[RawLine]:
    """Parse a free-form extraction answer.

    Expected shape: a list of {"code", "name", "debit", "credit", "balance"}.
    Anything but a list yields no lines; amounts are parsed leniently.
    """
    data = load_json(payload, "extracted lines")
    if not isinstance(data, list):
        return []

    lines = []
    for item in data:
        if not isinstance(item, dict):
            continue
        lines.append(
            RawLine(
                code=str(item.get("code") or "").strip(),
                name=str(item.get("name") or "").strip(),
                debit=parse_lenient_amount(item.get("debit")),
                credit=parse_lenient_amount(item.get("credit")),
                balance=parse_lenient_amount(item.get("balance")),
            )
        )
    return lines


def build_classification_request(
    raw_lines: Sequence[RawLine], limit: int = CLASSIFICATION_LINE_LIMIT
) -> list[dict[str, Any]]:
    """Build the items sent to the oracle for classification.

    Only the first `limit` lines are sent; lines past the cap are left to
    the Unclassified fallback.
    """
    return [
        {"id": index, "name": line.name, "code": line.code, "balance": float(line.balance)}
        for index, line in enumerate(raw_lines[:limit])
    ]


def select_guidance(
    custom_regulations: Optional[str], global_model: Optional[str]
) -> ClassificationGuidance:
    """Pick the rule set classification should follow.

    Client-specific regulations win over the global standard model, which
    wins over the default canonical categories. Texts of ten characters or
    fewer are ignored.
    """
    if custom_regulations and len(custom_regulations) > MIN_GUIDANCE_LENGTH:
        return ClassificationGuidance(kind="client", text=custom_regulations)
    if global_model and len(global_model) > MIN_GUIDANCE_LENGTH:
        return ClassificationGuidance(kind="global", text=global_model)
    return ClassificationGuidance(kind="default", text=canonical_guidance_text())
