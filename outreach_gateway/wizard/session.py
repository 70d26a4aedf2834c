"""
Session context - the wizard's token store.
"""
from typing import Optional


class SessionContext:
    """
    Single slot holding the token and user id of one outreach flow.

    Set when the OAuth redirect lands, overwritten by the next login,
    cleared on reset. Nothing is revoked server-side.
    """

    def __init__(self):
        self.token: Optional[str] = None
        self.user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.user_id)

    def set(self, token: str, user_id: str):
        self.token = token
        self.user_id = user_id

    def clear(self):
        self.token = None
        self.user_id = None
