"""Snapshot loading for the `Heavy_Metals` measurement document."""
