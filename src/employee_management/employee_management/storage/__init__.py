"""Key-value persistence adapters.

Each partition (accounts, session, attendance, time-off) is stored as a single
JSON document under a fixed key and read/written wholesale.
"""
