# ski_scheduler/domain/models/token_domain_model.py

from enum import Enum


class TokenState(str, Enum):
    """
    State of a session token as seen by the server at verification time.

    There is no transition back to ``VALID`` from any other state.
    """
    VALID = "valid"        # signature ok, not expired, not blacklisted
    EXPIRED = "expired"    # signature ok, expiry passed
    REVOKED = "revoked"    # signature ok, not expired, blacklisted
    INVALID = "invalid"    # signature mismatch or undecodable
