"""Availability grid domain logic: block extraction, overlap layout and week views."""
