"""
DID token decoding and validation.

A DID token is base64 encoded JSON of the form ``[proof, claim]`` where
``claim`` is itself a JSON string and ``proof`` is the issuer's
``personal_sign`` signature over that exact string.
"""

import base64
import binascii
import json
import re
import time
from typing import Any, Callable, Dict, Optional, Tuple

from eth_account import Account
from eth_account.messages import encode_defunct
from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, ValidationError

from magic_admin.errors import DIDTokenExpired, DIDTokenInvalid, DIDTokenMalformed
from magic_admin.logging import get_logger

ISSUER_PATTERN = re.compile(r"^did:ethr:(0x[0-9a-fA-F]{40})$")
URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


class DIDClaim(BaseModel):
    """Claim carried by a DID token."""
    model_config = ConfigDict(extra="allow")

    iat: StrictInt
    ext: StrictInt
    iss: StrictStr
    sub: StrictStr
    aud: StrictStr
    nbf: Optional[StrictInt] = None
    tid: Optional[StrictStr] = None


def construct_issuer_with_public_address(public_address: str) -> str:
    """Return the ``did:ethr:`` issuer for a public address."""
    return f"did:ethr:{public_address}"


def parse_public_address(issuer: str) -> str:
    """Return the address part of a ``did:ethr:<address>`` issuer."""
    match = ISSUER_PATTERN.match(issuer)
    if not match:
        raise DIDTokenMalformed(
            "Issuer is not a did:ethr address",
            details={"issuer": issuer}
        )
    return match.group(1)


class TokenValidator:
    """Decodes DID tokens and checks their signature and validity window."""

    def __init__(self, clock: Optional[Callable[[], float]] = None, client_id: Optional[str] = None):
        self.clock = clock or time.time
        self.client_id = client_id
        self.logger = get_logger("magic_admin.token")

    def decode(self, did_token: str) -> Tuple[str, Dict[str, Any]]:
        """Decode a DID token into ``(proof, claim)``."""
        proof, _, claim = self._decode(did_token)
        return proof, claim

    def get_issuer(self, did_token: str) -> str:
        """Return the ``iss`` claim of a DID token without validating it."""
        return self.get_claim(did_token)["iss"]

    def get_public_address(self, did_token: str) -> str:
        """Return the public address inside the token's ``did:ethr`` issuer."""
        return parse_public_address(self.get_issuer(did_token))

    def get_claim(self, did_token: str) -> Dict[str, Any]:
        """Return the decoded claim mapping without validating the token."""
        _, _, claim = self._decode(did_token)
        return claim

    def validate(self, did_token: str) -> None:
        """Validate a DID token, raising on the first failed check.

        The signature is checked before any time window so that a forged
        token never reaches the expiry checks.
        """
        proof, raw_claim, claim = self._decode(did_token)
        issuer = claim["iss"]

        try:
            recovered_address = Account.recover_message(encode_defunct(text=raw_claim), signature=proof)
        except Exception as e:
            self._reject("signature_unrecoverable", issuer)
            raise DIDTokenInvalid(
                "Signature could not be recovered from the DID token proof",
                details={"issuer": issuer, "error": str(e)}
            ) from e

        match = ISSUER_PATTERN.match(issuer)
        if not match or match.group(1).lower() != recovered_address.lower():
            self._reject("signer_mismatch", issuer)
            raise DIDTokenInvalid(
                "Signature mismatch between proof and claim issuer",
                details={"issuer": issuer, "recovered_address": recovered_address}
            )

        now = self.clock()

        if now < claim["iat"]:
            self._reject("used_before_issued", issuer)
            raise DIDTokenInvalid(
                "DID token cannot be used before its issued-at time",
                details={"issuer": issuer, "iat": claim["iat"], "now": now}
            )

        if now > claim["ext"]:
            self._reject("expired", issuer)
            raise DIDTokenExpired(
                "DID token has expired",
                details={"issuer": issuer, "ext": claim["ext"], "now": now}
            )

        nbf = claim.get("nbf")
        if nbf is not None and now < nbf:
            self._reject("not_yet_valid", issuer)
            raise DIDTokenInvalid(
                "DID token cannot be used before its not-before time",
                details={"issuer": issuer, "nbf": nbf, "now": now}
            )

        if self.client_id is not None and claim["aud"] != self.client_id:
            self._reject("audience_mismatch", issuer)
            raise DIDTokenInvalid(
                "DID token audience does not match this client",
                details={"issuer": issuer, "aud": claim["aud"]}
            )

        self.logger.debug("DID token validated", issuer=issuer)

    def _reject(self, reason: str, issuer: str) -> None:
        self.logger.warning("DID token rejected", reason=reason, issuer=issuer)

    def _decode(self, did_token: str) -> Tuple[str, str, Dict[str, Any]]:
        """Return ``(proof, raw claim string, claim mapping)``."""
        if not isinstance(did_token, str):
            raise DIDTokenMalformed("DID token must be a string")

        # Accept the URL-safe alphabet and missing padding
        normalized = did_token.translate(URLSAFE_TO_STANDARD)
        normalized += "=" * (-len(normalized) % 4)
        try:
            decoded = base64.b64decode(normalized, validate=True)
            payload = json.loads(decoded)
        except (binascii.Error, ValueError, TypeError) as e:
            raise DIDTokenMalformed(
                "DID token could not be decoded",
                details={"error": str(e)}
            ) from e

        if not isinstance(payload, list) or len(payload) != 2:
            raise DIDTokenMalformed("DID token must decode to a [proof, claim] pair")

        proof, raw_claim = payload
        if not isinstance(proof, str) or not isinstance(raw_claim, str):
            raise DIDTokenMalformed("DID token proof and claim must both be strings")

        try:
            claim = json.loads(raw_claim)
        except ValueError as e:
            raise DIDTokenMalformed(
                "DID token claim is not valid JSON",
                details={"error": str(e)}
            ) from e

        if not isinstance(claim, dict):
            raise DIDTokenMalformed("DID token claim must be a JSON object")

        try:
            DIDClaim.model_validate(claim)
        except ValidationError as e:
            raise DIDTokenMalformed(
                "DID token claim is missing required fields",
                details={"errors": [
                    {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                    for error in e.errors()
                ]}
            ) from e

        return proof, raw_claim, claim
