"""Ride domain: commands, errors, lifecycle operations and geo calculations."""
