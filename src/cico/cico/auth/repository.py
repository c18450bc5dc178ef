from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PinIdentity


class AuthRepository(Protocol):
    def authenticate_pin(self, company_id: str, pin: str) -> Sequence[PinIdentity]:
        """Run the server-side PIN check; an empty result means no match."""

        raise NotImplementedError

    def get_user_id_for_token(self, token: str) -> Optional[str]:
        raise NotImplementedError

    def get_roles(self, user_id: str) -> Sequence[str]:
        raise NotImplementedError

    def get_company_id(self, user_id: str) -> Optional[str]:
        """Company of the profile linked to this auth user, if any."""

        raise NotImplementedError
