"""
HTTP API for Flight Price Tracker.
"""
