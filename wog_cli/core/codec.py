"""Shareable collection codec: gzip + URL-safe base64 tokens.

Tokens carry no version marker. Decoding sniffs the payload shape with an
ordered list of strategies, oldest format first:

1. uncompressed JSON collection (debugging links),
2. gzipped JSON collection,
3. gzipped bare description text.
"""

from __future__ import annotations

import base64
import binascii
import gzip
import json
import zlib
from typing import Any, Callable, List, Optional, Tuple
from urllib.parse import parse_qs, quote, urlsplit

from loguru import logger

from wog_cli.core.constants import SHARE_QUERY_KEYS
from wog_cli.core.models import Collection, entry_from_dict

DecoderStrategy = Callable[[bytes], Collection]

_ERRORS = (
    ValueError,
    TypeError,
    KeyError,
    OSError,
    EOFError,
    OverflowError,
    RecursionError,
    zlib.error,
)


class CollectionEncodeError(RuntimeError):
    """Raised when a collection cannot be compressed into a token."""


class CollectionDecodeError(RuntimeError):
    """Raised when a token matches none of the known payload shapes."""


def _to_base64url(data: bytes) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return encoded.replace("+", "-").replace("/", "_").rstrip("=")


def _from_base64url(token: str) -> bytes:
    # Query parsing turns a raw "+" into a space.
    normalized = "".join(token.strip().replace(" ", "+").split())
    normalized = normalized.replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    return base64.b64decode(normalized, validate=True)


def _compress(text: str) -> str:
    try:
        compressed = gzip.compress(text.encode("utf-8"), mtime=0)
    except (zlib.error, OSError, ValueError) as exc:
        logger.error(f"Failed to encode workout collection: {exc}")
        raise CollectionEncodeError("Failed to encode workout collection") from exc
    return _to_base64url(compressed)


def serialize_collection(collection: Collection) -> str:
    """Canonical JSON text for a collection (fixed key order, compact separators)."""
    return json.dumps(collection.to_dict(), ensure_ascii=False, separators=(",", ":"))


def encode_collection(collection: Collection) -> str:
    """Encode title, description and entries into a URL-safe token."""
    payload = serialize_collection(collection)
    token = _compress(payload)
    logger.debug(
        f"Encoded collection {collection.title!r}: {len(collection.entries)} entries, "
        f"{len(payload)} chars -> {len(token)} token chars"
    )
    return token


def encode_description(description: str) -> str:
    """Encode only the description; entries are re-derived by the parser on load."""
    token = _compress(description)
    logger.debug(f"Encoded description: {len(description)} chars -> {len(token)} token chars")
    return token


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def collection_from_payload(payload: Any) -> Collection:
    """Validate a decoded JSON payload and build a collection from it."""
    if not isinstance(payload, dict):
        raise ValueError("Collection payload must be an object")

    title = payload.get("title")
    description = payload.get("description")
    items = payload.get("workouts", payload.get("entries"))
    if not title or not isinstance(title, str):
        raise ValueError("Collection payload is missing a title")
    if not description or not isinstance(description, str):
        raise ValueError("Collection payload is missing a description")
    if not isinstance(items, list):
        raise ValueError("Collection payload is missing an entries array")

    for item in items:
        if not isinstance(item, dict):
            raise ValueError("Invalid workout structure")
        weight = item.get("multiplier", item.get("weight"))
        if not (item.get("id") and item.get("name") and item.get("url")) or not _is_number(weight):
            raise ValueError(f"Invalid workout structure: {item!r}")

    return Collection(
        title=title,
        description=description,
        entries=[entry_from_dict(item) for item in items],
    )


def _decode_plain_json(raw: bytes) -> Collection:
    return collection_from_payload(json.loads(raw.decode("utf-8")))


def _decode_gzip_json(raw: bytes) -> Collection:
    return collection_from_payload(json.loads(gzip.decompress(raw).decode("utf-8")))


def _decode_gzip_text(raw: bytes) -> Collection:
    return Collection(title="", description=gzip.decompress(raw).decode("utf-8"), entries=[])


DECODER_STRATEGIES: Tuple[Tuple[str, DecoderStrategy], ...] = (
    ("plain-json", _decode_plain_json),
    ("gzip-json", _decode_gzip_json),
    ("gzip-text", _decode_gzip_text),
)


def decode_collection(token: str) -> Collection:
    """Decode a token produced by any historical encoder version."""
    try:
        raw = _from_base64url(token)
    except (binascii.Error, ValueError) as exc:
        logger.warning(f"Failed to decode workout collection: invalid base64 ({exc})")
        raise CollectionDecodeError("Failed to decode workout collection") from exc

    if not raw:
        logger.warning("Failed to decode workout collection: empty payload")
        raise CollectionDecodeError("Failed to decode workout collection")

    failures: List[str] = []
    for name, strategy in DECODER_STRATEGIES:
        try:
            collection = strategy(raw)
        except _ERRORS as exc:
            logger.debug(f"Decoder strategy {name} did not match: {exc}")
            failures.append(name)
            continue
        logger.debug(f"Decoded collection via {name}: {len(collection.entries)} entries")
        return collection

    logger.warning(f"Failed to decode workout collection (tried {', '.join(failures)})")
    raise CollectionDecodeError("Failed to decode workout collection")


def extract_token(url: str) -> Optional[str]:
    """Read the token from a share URL, preferring the newest query key."""
    try:
        query = parse_qs(urlsplit(url).query, keep_blank_values=False)
    except ValueError as exc:
        logger.warning(f"Failed to extract data from URL: {exc}")
        return None

    for key in SHARE_QUERY_KEYS:
        values = query.get(key)
        if values and values[0]:
            return values[0]
    return None


def resolve_token(value: str) -> Optional[str]:
    """Accept either a bare token or a share URL."""
    text = value.strip()
    if not text:
        return None
    if "://" in text or text.startswith("?") or "=" in text.rstrip("="):
        return extract_token(text)
    return text


def create_share_url(
    collection: Collection,
    origin: str,
    base_path: str = "/",
    query_key: str = SHARE_QUERY_KEYS[0],
    compact: bool = True,
    description: Optional[str] = None,
) -> str:
    """Build ``<origin><base_path>?<key>=<token>`` for a collection.

    Compact links carry only ``description`` (defaulting to the collection's
    own description); full links carry the whole collection.
    """
    if compact:
        token = encode_description(collection.description if description is None else description)
    else:
        token = encode_collection(collection)
    return f"{origin.rstrip('/')}{base_path}?{query_key}={quote(token, safe='')}"
