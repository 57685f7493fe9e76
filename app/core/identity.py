from typing import Optional, Protocol

from fastapi import Request


class IdentityProof(Protocol):
    """Works out which user email a request is acting for."""

    def identify(self, request: Request) -> Optional[str]:
        ...


class EmailQueryIdentity:
    """
    Trusts the ``email`` query parameter as-is.

    Clients identify themselves by email string alone, so anyone who knows an
    address can act as that user. Swap in a token-checking proof on the
    AppContext to close that gap.
    """

    param = "email"

    def identify(self, request: Request) -> Optional[str]:
        email = request.query_params.get(self.param)
        return email or None
