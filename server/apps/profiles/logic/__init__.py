"""Business logic for owner profiles and avatars."""
