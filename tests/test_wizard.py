"""
Tests for the outreach wizard, driven end-to-end against the gateway app.
"""
import httpx
import pytest

from outreach_gateway.wizard import (
    GatewayClient,
    OutreachWizard,
    SessionContext,
    WizardError,
    WizardStep,
)
from outreach_gateway.wizard.machine import strip_auth_params

LANDING_URL = "http://frontend.test/?token=vendor-token&user_id=ACoAA123"


@pytest.fixture
def wizard(client):
    return OutreachWizard(GatewayClient(http=client))


@pytest.fixture
def sends(unipile):
    unipile.add("POST", "/messages", httpx.Response(201, json={"id": "msg_123"}))
    return unipile


class TestStripAuthParams:
    """Tests for cleaning the landing URL."""

    def test_removes_auth_params(self):
        assert strip_auth_params(LANDING_URL) == "http://frontend.test/"

    def test_keeps_other_params(self):
        url = "http://frontend.test/app?ref=mail&token=T&user_id=U"
        assert strip_auth_params(url) == "http://frontend.test/app?ref=mail"

    def test_removes_error(self):
        assert strip_auth_params("http://frontend.test/?error=auth_failed") == "http://frontend.test/"

    def test_keeps_other_params_encoded(self):
        url = "http://frontend.test/?q=a%20b&token=T&user_id=U"
        assert strip_auth_params(url) == "http://frontend.test/?q=a%20b"


class TestSessionContext:
    """Tests for the token slot."""

    def test_lifecycle(self):
        session = SessionContext()
        assert not session.is_authenticated

        session.set("T", "U")
        assert session.is_authenticated

        session.set("T2", "U2")
        assert (session.token, session.user_id) == ("T2", "U2")

        session.clear()
        assert session.token is None
        assert not session.is_authenticated


class TestLanding:
    """Tests for the automatic login -> profile transition."""

    def test_token_in_url_moves_to_profile(self, wizard):
        assert wizard.step == WizardStep.LOGIN

        visible_url = wizard.handle_landing(LANDING_URL)

        assert wizard.step == WizardStep.PROFILE
        assert visible_url == "http://frontend.test/"
        assert wizard.session.token == "vendor-token"
        assert wizard.session.user_id == "ACoAA123"
        assert wizard.profile["name"] == "Jane Doe"
        assert wizard.error == ""

    def test_token_without_user_id_stays_on_login(self, wizard):
        wizard.handle_landing("http://frontend.test/?token=vendor-token")

        assert wizard.step == WizardStep.LOGIN
        assert not wizard.session.is_authenticated

    def test_error_param(self, wizard):
        visible_url = wizard.handle_landing("http://frontend.test/?error=auth_failed")

        assert wizard.step == WizardStep.LOGIN
        assert wizard.error == "Authentication failed"
        assert visible_url == "http://frontend.test/"

    def test_profile_failure_is_reported(self, wizard, unipile):
        unipile.add("GET", "/users/me", httpx.Response(200, json={"type": "WHATSAPP"}))

        wizard.handle_landing(LANDING_URL)

        assert wizard.step == WizardStep.PROFILE
        assert wizard.profile is None
        assert wizard.error == "Failed to load profile: LinkedIn account not found"

    def test_new_login_starts_a_clean_flow(self, wizard, sends):
        wizard.handle_landing(LANDING_URL)
        wizard.generate_message()
        wizard.send_message()
        assert wizard.step == WizardStep.SUCCESS

        wizard.handle_landing("http://frontend.test/?token=second-token&user_id=ACoAA123")

        assert wizard.step == WizardStep.PROFILE
        assert wizard.session.token == "second-token"
        assert wizard.message == ""
        assert wizard.message_id is None
        assert wizard.profile["name"] == "Jane Doe"

    def test_login_url(self, wizard):
        assert wizard.login_url() == "http://testserver/auth/linkedin"


class TestFlow:
    """Tests for profile -> message -> success."""

    def test_full_flow(self, wizard, generator, sends):
        wizard.handle_landing(LANDING_URL)

        message = wizard.generate_message()
        assert wizard.step == WizardStep.MESSAGE
        assert message == generator.reply

        message_id = wizard.send_message()
        assert wizard.step == WizardStep.SUCCESS
        assert message_id == "msg_123"
        assert sends.last_json()["recipient_id"] == "ACoAA123"
        assert sends.last_json()["text"] == generator.reply

    def test_regenerate_replaces_message(self, wizard, generator):
        wizard.handle_landing(LANDING_URL)
        wizard.generate_message()

        generator.reply = "A different draft"
        wizard.generate_message()

        assert wizard.step == WizardStep.MESSAGE
        assert wizard.message == "A different draft"
        assert len(generator.prompts) == 2

    def test_edited_message_is_sent(self, wizard, sends):
        wizard.handle_landing(LANDING_URL)
        wizard.generate_message()
        wizard.edit_message("My own words")

        wizard.send_message()

        assert sends.last_json()["text"] == "My own words"

    def test_generation_failure_keeps_step(self, wizard, generator):
        wizard.handle_landing(LANDING_URL)
        generator.fail = True

        wizard.generate_message()

        assert wizard.step == WizardStep.PROFILE
        assert wizard.error == "Failed to generate message: Failed to generate message"
        assert wizard.loading is False

    def test_send_failure_keeps_message_step(self, wizard, unipile):
        unipile.add("POST", "/messages", httpx.Response(500, json={"title": "boom"}))
        wizard.handle_landing(LANDING_URL)
        wizard.generate_message()

        assert wizard.send_message() is None
        assert wizard.step == WizardStep.MESSAGE
        assert wizard.error == "Failed to send message: Failed to send message"

    def test_cannot_send_empty_message(self, wizard, sends):
        wizard.handle_landing(LANDING_URL)
        wizard.generate_message()
        wizard.edit_message("  ")

        with pytest.raises(WizardError):
            wizard.send_message()
        assert sends.requests[-1].url.path == "/v1/users/me"

    def test_cannot_send_without_session(self, wizard):
        wizard.handle_landing(LANDING_URL)
        wizard.generate_message()
        wizard.session.clear()

        with pytest.raises(WizardError):
            wizard.send_message()

    def test_copy_returns_draft_without_sending(self, wizard, generator, sends):
        wizard.handle_landing(LANDING_URL)
        wizard.generate_message()

        assert wizard.copy_message() == generator.reply
        assert wizard.copied is True
        assert wizard.step == WizardStep.MESSAGE
        assert sends.requests[-1].url.path == "/v1/users/me"

    def test_edit_clears_copied(self, wizard):
        wizard.handle_landing(LANDING_URL)
        wizard.generate_message()
        wizard.copy_message()

        wizard.edit_message("Changed")

        assert wizard.copied is False

    def test_cannot_copy_outside_message_step(self, wizard):
        wizard.handle_landing(LANDING_URL)

        with pytest.raises(WizardError):
            wizard.copy_message()

    def test_cannot_generate_before_login(self, wizard):
        with pytest.raises(WizardError):
            wizard.generate_message()

    def test_cannot_load_profile_from_login(self, wizard):
        with pytest.raises(WizardError):
            wizard.load_profile()


class TestNavigation:
    """Tests for back and reset."""

    def test_back_walks_one_step(self, wizard, sends):
        wizard.handle_landing(LANDING_URL)
        wizard.generate_message()
        wizard.send_message()

        wizard.back()
        assert wizard.step == WizardStep.MESSAGE

        wizard.back()
        assert wizard.step == WizardStep.PROFILE
        assert wizard.profile is not None

    def test_back_from_profile_logs_out(self, wizard):
        wizard.handle_landing(LANDING_URL)

        wizard.back()

        assert wizard.step == WizardStep.LOGIN
        assert not wizard.session.is_authenticated
        assert wizard.profile is None

    def test_back_on_login_is_noop(self, wizard):
        wizard.back()
        assert wizard.step == WizardStep.LOGIN

    def test_reset_clears_everything(self, wizard, sends):
        wizard.handle_landing(LANDING_URL)
        wizard.generate_message()
        wizard.send_message()

        wizard.reset()

        assert wizard.step == WizardStep.LOGIN
        assert wizard.profile is None
        assert wizard.message == ""
        assert wizard.message_id is None
        assert wizard.session.token is None
