"""Configuration module for ftpsession.

- CredentialManager: Secure password storage via keyring
"""
