"""Stored repeating data, completion handling and phrase parsing for taskrepeat."""
