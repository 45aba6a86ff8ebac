"""Master seeds: the whole palette state as one copy-pasteable string.

Format: ``PLT1.<body>`` where ``<body>`` is compact JSON, UTF-8 encoded and
then base64url encoded without padding.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Sequence

from pydantic import ValidationError

from chromaseed.constants import AUTO_THEME_ID, MASTER_SEED_PREFIX, MASTER_SEED_VERSION
from chromaseed.palette.models import PaletteColor
from chromaseed.palette.schemas import ColorRecord, MasterSeedPayload

logger = logging.getLogger(__name__)


def base64url_encode(text: str) -> str:
    raw = base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")
    return raw.rstrip("=")


def base64url_decode(body: str) -> str | None:
    """Inverse of :func:`base64url_encode`; None for bad alphabet, length or UTF-8."""
    normalized = body.replace("-", "+").replace("_", "/")
    padded = normalized + "=" * (-len(normalized) % 4)
    try:
        return base64.b64decode(padded, validate=True).decode("utf-8")
    except ValueError:
        return None


def _reject_constant(name: str):
    raise ValueError(f"non-finite JSON constant: {name}")


def build_payload(seed: int, colors: Sequence[PaletteColor], locks: Sequence[bool],
                  theme_id: str, selected_theme_id: str = AUTO_THEME_ID) -> MasterSeedPayload:
    return MasterSeedPayload(
        v=MASTER_SEED_VERSION,
        seed=seed,
        theme_id=theme_id,
        selected_theme_id=selected_theme_id,
        locks=list(locks),
        palette=[ColorRecord.from_color(c) for c in colors],
    )


def build_master_seed(payload: MasterSeedPayload | dict) -> str:
    if isinstance(payload, MasterSeedPayload):
        payload = payload.to_wire()
    body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return f"{MASTER_SEED_PREFIX}.{base64url_encode(body)}"


def parse_master_seed(text: str) -> MasterSeedPayload | None:
    """Decode a master seed.  Never raises; None for anything malformed."""
    if not isinstance(text, str):
        return None
    segments = text.strip().split(".")
    prefix = segments[0]
    body = segments[1] if len(segments) > 1 else ""
    if prefix != MASTER_SEED_PREFIX or not body:
        logger.debug("Rejected master seed: bad prefix or empty body")
        return None

    decoded = base64url_decode(body)
    if not decoded:
        logger.debug("Rejected master seed: body is not base64url UTF-8")
        return None

    try:
        parsed = json.loads(decoded, parse_constant=_reject_constant)
        return MasterSeedPayload.model_validate(parsed)
    except ValidationError as exc:
        logger.debug("Rejected master seed payload: %d validation errors", exc.error_count())
        return None
    except (ValueError, RecursionError) as exc:
        logger.debug("Rejected master seed JSON: %s", type(exc).__name__)
        return None
