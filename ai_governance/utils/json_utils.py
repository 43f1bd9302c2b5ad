# ai_governance/utils/json_utils.py
from __future__ import annotations

import hashlib
import json
from typing import Any

from ai_governance.models import PayloadDigest


def canonical_json(obj: Any) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def sha256_fingerprint(obj: Any) -> str:
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()


def summarize_shape(obj: Any, max_keys: int = 5) -> str:
    """
    Key-only description of a payload. Values never appear in the result.
    """
    if isinstance(obj, dict):
        keys = [str(k) for k in obj.keys()]
        more = "..." if len(keys) > max_keys else ""
        return f"Object with {len(keys)} keys: {', '.join(keys[:max_keys])}{more}"
    if isinstance(obj, list):
        return f"Array with {len(obj)} items"
    if isinstance(obj, str):
        return f"String with {len(obj)} chars"
    if obj is None:
        return "null"
    return type(obj).__name__


def digest_payload(obj: Any, max_keys: int = 5) -> PayloadDigest:
    raw = canonical_json(obj).encode("utf-8")
    return PayloadDigest(
        sha256=hashlib.sha256(raw).hexdigest(),
        size_bytes=len(raw),
        summary=summarize_shape(obj, max_keys=max_keys),
    )


def parse_json_strict(text: str) -> Any:
    """
    Parse a model response as JSON. Prose is not accepted; a single pair of
    code fences (```json ... ```) is stripped first. Raises ValueError.
    """
    s = (text or "").strip()
    if not s:
        raise ValueError("empty response")
    if s.startswith("```"):
        s = s[3:]
        if s[:4].lower() == "json":
            s = s[4:]
        if s.rstrip().endswith("```"):
            s = s.rstrip()[:-3]
        s = s.strip()
    try:
        return json.loads(s)
    except json.JSONDecodeError as e:
        raise ValueError(f"response is not valid JSON: {e.msg} (line {e.lineno}, col {e.colno})") from e


def get_by_dotted_path(obj: Any, path: str) -> Any:
    """
    Small dotted-path extractor: e.g., "proposalData.timeline" or "items[0].name".
    Returns None when any segment is missing.
    """
    cur = obj
    if not path:
        return cur

    parts = path.replace("]", "").split(".")
    for part in parts:
        if not part:
            continue
        if "[" in part:
            name, idx_str = part.split("[", 1)
            if name:
                if not isinstance(cur, dict) or name not in cur:
                    return None
                cur = cur.get(name)
            try:
                i = int(idx_str)
            except ValueError:
                return None
            if not isinstance(cur, list) or i >= len(cur) or i < 0:
                return None
            cur = cur[i]
        else:
            if not isinstance(cur, dict) or part not in cur:
                return None
            cur = cur.get(part)
    return cur
