"""
NoteKeep Backend — Session Schemas
====================================

What:  Typed shape of the signed-in identity and of a Google login event.
Why:   The session cookie is an untyped dict; validating it through
       SessionIdentity means the rest of the app reads `session.user_id`
       and never pokes at raw keys.
"""

from typing import Optional

from pydantic import BaseModel, Field


class LoginEvent(BaseModel):
    """
    What:  The profile Google returns after a successful OAuth handshake.
    Who:   Built by GoogleOAuthClient.fetch_userinfo(); consumed by build_session().
    """
    email: str = Field(description="Verified Google account email")
    name: Optional[str] = Field(default=None)
    picture: Optional[str] = Field(default=None)


class SessionIdentity(BaseModel):
    """
    What:  Identity stored in the session cookie for the browser session's lifetime.

    user_id:
        Internal numeric id. Assigned once, on the first login, and never
        derived from the Google account. Every first-time user gets the
        same configured default (101).
    """
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
    user_id: Optional[int] = Field(default=None, description="Internal numeric user id")

    model_config = {"frozen": True}
