"""
Request Signer
Nonce-stamped request bodies signed with HMAC-SHA512
"""

import time
import hmac
import hashlib
from typing import Mapping, Optional, Tuple


class RequestSigner:
    """
    Builds and signs private API request bodies

    The nonce is seeded from wall-clock seconds and incremented once per
    signed body. It is shared by every request kind, so a single signer must
    not be used from several threads without external locking.
    """

    def __init__(self, secret: str, nonce: Optional[int] = None):
        self.secret = secret
        self.nonce = int(time.time()) if nonce is None else nonce

    def next_nonce(self) -> int:
        nonce = self.nonce
        self.nonce += 1
        return nonce

    def build_body(self, params: Mapping[str, str]) -> str:
        """
        Serialize params as 'nonce=N&key=value...' in the caller's order

        Args:
            params: Request parameters

        Returns:
            Request body string
        """
        parts = [f"nonce={self.next_nonce()}"]
        parts.extend(f"{key}={value}" for key, value in params.items())
        return "&".join(parts)

    def signature(self, body: str) -> str:
        """Lowercase hex HMAC-SHA512 of body keyed with the API secret"""
        return hmac.new(
            self.secret.encode('utf-8'),
            body.encode('utf-8'),
            hashlib.sha512
        ).hexdigest()

    def sign(self, params: Mapping[str, str]) -> Tuple[str, str]:
        """
        Build a fresh body for params and sign it

        Returns:
            (body, signature)
        """
        body = self.build_body(params)
        return body, self.signature(body)
