"""
Replica of the shared QSO log.

Each replica holds its own copy of the record set and converges with the
others by applying the same mutation messages (add, edit, bulk add,
delete) delivered by an unordered, possibly duplicating transport.
"""
