"""Tests for the address book package."""
