"""
Outreach wizard - the client side of the flow.
connect -> review profile -> generate message -> confirm.
"""
from outreach_gateway.wizard.client import GatewayClient, GatewayError
from outreach_gateway.wizard.machine import OutreachWizard, WizardError, WizardStep
from outreach_gateway.wizard.session import SessionContext

__all__ = [
    "GatewayClient",
    "GatewayError",
    "OutreachWizard",
    "SessionContext",
    "WizardError",
    "WizardStep",
]
