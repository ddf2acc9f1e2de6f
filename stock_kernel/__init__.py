"""
Stock Kernel - credential and inventory persistence core.

Two peer stores sharing only the account id as a value:
- CredentialStore: salted password hashing, username policy, duplicate checks
- InventoryStore: owner-scoped item rows with all-or-nothing mutations
"""

__version__ = "0.1.0"
