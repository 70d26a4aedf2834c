"""
Outreach wizard state machine.

    login -> profile -> message -> success

Transitions are driven by user actions, plus one automatic transition:
landing on the frontend URL with `token` and `user_id` moves login -> profile.
`back()` goes one step back, `reset()` returns to login from anywhere.
"""
import logging
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, unquote_plus, urlsplit, urlunsplit

from outreach_gateway.wizard.client import GatewayClient, GatewayError
from outreach_gateway.wizard.session import SessionContext

logger = logging.getLogger(__name__)

AUTH_PARAMS = ("token", "user_id", "error")


class WizardStep(str, Enum):
    LOGIN = "login"
    PROFILE = "profile"
    MESSAGE = "message"
    SUCCESS = "success"


PREVIOUS_STEP = {
    WizardStep.PROFILE: WizardStep.LOGIN,
    WizardStep.MESSAGE: WizardStep.PROFILE,
    WizardStep.SUCCESS: WizardStep.MESSAGE,
}


class WizardError(Exception):
    """Action not allowed in the current step."""
    pass


def strip_auth_params(url: str) -> str:
    """Drop token/user_id/error from a URL, keeping everything else."""
    parts = urlsplit(url)
    # Raw segments are kept as-is so other parameters keep their encoding
    kept = [
        segment for segment in parts.query.split("&")
        if segment and unquote_plus(segment.split("=", 1)[0]) not in AUTH_PARAMS
    ]
    return urlunsplit(parts._replace(query="&".join(kept)))


class OutreachWizard:
    """One outreach flow: its step, the loaded profile and the draft message."""

    def __init__(self, client: GatewayClient, session: Optional[SessionContext] = None):
        self.client = client
        self.session = session or SessionContext()
        self.step = WizardStep.LOGIN
        self.profile: Optional[Dict[str, Any]] = None
        self.identifiers: Optional[Dict[str, Any]] = None
        self.message = ""
        self.message_id: Optional[str] = None
        self.error = ""
        self.loading = False
        self.copied = False

    # -------------------------------------------------------------------------
    # Login
    # -------------------------------------------------------------------------

    def login_url(self) -> str:
        """Where "Connect with LinkedIn" sends the browser."""
        return self.client.login_url()

    def handle_landing(self, url: str) -> str:
        """
        Process the URL the frontend was loaded with.

        On `token` + `user_id` any previous flow is discarded, the session is
        stored, the wizard moves to the profile step and loads the profile.
        On `error` the failure is shown on the login step. Returns the URL
        with those parameters removed.
        """
        params = dict(parse_qsl(urlsplit(url).query))
        token = params.get("token")
        user_id = params.get("user_id")

        if token and user_id:
            self.reset()
            self.session.set(token, user_id)
            self.step = WizardStep.PROFILE
            self.load_profile()
        elif params.get("error"):
            logger.warning(f"OAuth returned error marker {params['error']!r}")
            self.error = "Authentication failed"

        return strip_auth_params(url)

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    def load_profile(self) -> Optional[Dict[str, Any]]:
        if self.step != WizardStep.PROFILE:
            raise WizardError(f"Cannot load profile in step '{self.step.value}'")
        if not self.session.is_authenticated:
            raise WizardError("Cannot load profile without a session")

        self.loading = True
        self.error = ""
        try:
            data = self.client.fetch_profile(self.session.token)
            self.profile = data.get("profile")
            self.identifiers = data.get("identifiers")
        except GatewayError as e:
            self.profile = None
            self.error = f"Failed to load profile: {e.message}"
        finally:
            self.loading = False
        return self.profile

    # -------------------------------------------------------------------------
    # Message
    # -------------------------------------------------------------------------

    def generate_message(self) -> str:
        """Generate (or re-generate) the draft. Each call may return new text."""
        if self.step not in (WizardStep.PROFILE, WizardStep.MESSAGE):
            raise WizardError(f"Cannot generate a message in step '{self.step.value}'")
        if not self.profile:
            raise WizardError("Cannot generate a message before the profile is loaded")

        self.loading = True
        self.error = ""
        try:
            self.message = self.client.generate_message(self.profile, token=self.session.token)
            self.copied = False
            self.step = WizardStep.MESSAGE
        except GatewayError as e:
            self.error = f"Failed to generate message: {e.message}"
        finally:
            self.loading = False
        return self.message

    def edit_message(self, text: str):
        if self.step != WizardStep.MESSAGE:
            raise WizardError(f"Cannot edit the message in step '{self.step.value}'")
        self.message = text
        self.copied = False

    def copy_message(self) -> str:
        """Hand the draft to the caller (clipboard side channel); nothing is sent."""
        if self.step != WizardStep.MESSAGE or not self.message:
            raise WizardError("Nothing to copy")
        self.copied = True
        return self.message

    def send_message(self, recipient_id: Optional[str] = None) -> Optional[str]:
        """
        Dispatch the draft. Moves to success only once the gateway confirms.

        Not idempotent: calling again after a timeout may send twice.
        """
        if self.step != WizardStep.MESSAGE:
            raise WizardError(f"Cannot send in step '{self.step.value}'")
        if not self.message.strip():
            raise WizardError("Cannot send an empty message")
        if not self.session.token:
            raise WizardError("Cannot send without a session")

        self.loading = True
        self.error = ""
        try:
            result = self.client.send_message(
                self.message,
                recipient_id or self.session.user_id,
                self.session.token
            )
            self.message_id = result.get("messageId")
            self.step = WizardStep.SUCCESS
        except GatewayError as e:
            self.error = f"Failed to send message: {e.message}"
        finally:
            self.loading = False
        return self.message_id

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def back(self):
        previous = PREVIOUS_STEP.get(self.step)
        if previous is None:
            return
        if previous == WizardStep.LOGIN:
            self.reset()
            return
        self.error = ""
        self.step = previous

    def reset(self):
        self.step = WizardStep.LOGIN
        self.profile = None
        self.identifiers = None
        self.message = ""
        self.message_id = None
        self.copied = False
        self.error = ""
        self.session.clear()
