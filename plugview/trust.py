"""Ed25519 signature checks that tag plugins with a trust verdict."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey


@dataclass(frozen=True)
class TrustTag:
    """Outcome of verifying a plugin's signature; carries no policy of its own."""

    verified: bool = False
    signer_key_id: Optional[str] = None


@dataclass(frozen=True)
class TrustKey:
    """An Ed25519 public key (32 raw bytes) with an identifier."""

    key_id: str
    public_key_bytes: bytes


def _verifies(key: TrustKey, data: bytes, signature: bytes) -> bool:
    try:
        public_key = Ed25519PublicKey.from_public_bytes(bytes(key.public_key_bytes))
        public_key.verify(bytes(signature), bytes(data))
    except (InvalidSignature, ValueError):
        return False
    return True


def compute_trust_tag(
    wasm_bytes: bytes,
    signature: Optional[bytes],
    key_id_hint: Optional[str],
    trust_keys: Iterable[TrustKey],
) -> TrustTag:
    """Verify ``signature`` over ``wasm_bytes`` against the configured keys.

    With a ``key_id_hint`` only the key of that id is tried; otherwise every key
    is tried in order. Without a signature the tag is unverified.
    """
    if signature is None:
        return TrustTag()
    candidates = (
        key for key in trust_keys if key_id_hint is None or key.key_id == key_id_hint
    )
    for key in candidates:
        if _verifies(key, wasm_bytes, signature):
            return TrustTag(verified=True, signer_key_id=key.key_id)
    return TrustTag()