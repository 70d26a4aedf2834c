"""
LinkedIn Outreach Gateway.
Unipile + Gemini integration layer and the client-side outreach wizard.
"""
__version__ = "1.0.0"
