"""
Command implementations for the address book CLI.
"""
