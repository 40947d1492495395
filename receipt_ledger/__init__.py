"""
Receipt Ledger backend.

Receives payment receipt images forwarded by the chat transport, reads the
payer's name with a Gemini vision call and records the receipt in the Google
Sheets ledger, with the image stored in Google Drive.
"""

__version__ = "0.1.0"
