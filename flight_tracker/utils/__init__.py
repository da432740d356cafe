"""
Shared helpers for dates, price statistics, logging and seed data.
"""
