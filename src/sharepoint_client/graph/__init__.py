"""Microsoft Graph transport and data models."""
