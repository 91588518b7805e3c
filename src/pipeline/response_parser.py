"""Validate the text-generation model's reply before it is merged into a report."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Union

from pydantic import ValidationError

from models import CollaboratorReport

_FENCED = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
_DECODER = json.JSONDecoder()


@dataclass(frozen=True)
class Ok:
    value: CollaboratorReport


@dataclass(frozen=True)
class Err:
    reason: str


ParseResult = Union[Ok, Err]


def _extract_json(text: str) -> Any:
    """Plain JSON first, then each ```json fence, then the first decodable {...} object."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    for match in _FENCED.finditer(text):
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError:
            continue
    start = text.find("{")
    while start != -1:
        try:
            payload, _ = _DECODER.raw_decode(text, start)
            return payload
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
    raise ValueError("no JSON object found in response")


def parse_collaborator_response(raw: Any) -> ParseResult:
    """Turn a raw reply (text or already-decoded JSON) into Ok(report) or Err(reason)."""
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return Err("empty response")
        try:
            payload = _extract_json(text)
        except (ValueError, json.JSONDecodeError) as e:
            return Err(f"unparseable JSON: {e}")
    else:
        payload = raw

    if not isinstance(payload, dict):
        return Err(f"expected a JSON object, got {type(payload).__name__}")
    if payload.get("error"):
        return Err(f"collaborator reported error: {payload['error']}")

    try:
        return Ok(CollaboratorReport.model_validate(payload))
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        return Err(f"schema mismatch: {fields}")
