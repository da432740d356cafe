"""
Price analytics services: local time mapping, queries, bucketing and flex ranking.
"""
