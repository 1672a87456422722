"""
Test helpers: signed DID tokens and a scripted Magic API transport.
"""

import base64
import json
import time
from typing import Any, Dict, Optional

import httpx
from eth_account import Account
from eth_account.messages import encode_defunct

DEFAULT_PRIVATE_KEY = "0x" + "4c" * 32


def encode_did_token(proof: Any, claim: Any) -> str:
    """Base64 encode an arbitrary ``[proof, claim]`` pair."""
    return base64.b64encode(json.dumps([proof, claim]).encode("utf-8")).decode("ascii")


class DIDTokenFactory:
    """Mints DID tokens signed by a fixed private key."""

    def __init__(self, private_key: str = DEFAULT_PRIVATE_KEY):
        self.account = Account.from_key(private_key)

    @property
    def public_address(self) -> str:
        return self.account.address

    @property
    def issuer(self) -> str:
        return f"did:ethr:{self.account.address}"

    def build_claim(self, now: Optional[float] = None, **overrides: Any) -> Dict[str, Any]:
        """Return a claim valid for 15 minutes around ``now``; ``None`` overrides drop a field."""
        now = int(time.time() if now is None else now)
        claim = {
            "iat": now,
            "ext": now + 900,
            "iss": self.issuer,
            "sub": "6tFXTfRxykwMKOOjSMbdPrEMrpUl3m3j8DQycFqO2tw=",
            "aud": "did:magic:f54168e9-9ce9-47f2-81c8-7cb2a96b26ba",
            "nbf": now,
            "tid": "2ddf5983-983b-487d-b464-bc5e283a03c5",
        }
        claim.update(overrides)
        return {key: value for key, value in claim.items() if value is not None}

    def sign(self, raw_claim: str) -> str:
        """Return the hex ``personal_sign`` signature over ``raw_claim``."""
        signed = self.account.sign_message(encode_defunct(text=raw_claim))
        return "0x" + bytes(signed.signature).hex()

    def create_token(self, now: Optional[float] = None, **overrides: Any) -> str:
        """Return a signed DID token."""
        raw_claim = json.dumps(self.build_claim(now, **overrides))
        return encode_did_token(self.sign(raw_claim), raw_claim)


def json_response(status_code: int, body: Any) -> httpx.Response:
    """Build an httpx response carrying a JSON body."""
    return httpx.Response(status_code, content=json.dumps(body), headers={"Content-Type": "application/json"})


class RecordingTransport(httpx.MockTransport):
    """MockTransport that records requests and replays queued outcomes.

    Outcomes are consumed in order; the last one repeats. An exception
    outcome is raised instead of returned.
    """

    def __init__(self, *outcomes: Any):
        self.requests = []
        self.outcomes = list(outcomes)
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome.status_code, content=outcome.content, headers=outcome.headers)
