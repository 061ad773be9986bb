"""Core business logic layer.

Subpackages:
- expiry: date classification shared by pantry, donation and recipe views
- rewards: points ledger, levels, reward tiers and redemption
- pantry: pantry ledger (items, status transitions, images)
- donation: donation recorder and NGO directory
- recipes: recipe generation and "cooked" handling
- reporting: impact statistics
"""
__all__ = ["expiry", "rewards", "pantry", "donation", "recipes", "reporting"]
