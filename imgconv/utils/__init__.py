"""
Helper utilities for logging and output file bookkeeping.
"""
