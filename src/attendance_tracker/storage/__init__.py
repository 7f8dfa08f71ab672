"""Key-value storage backends.

Every collection is persisted as one JSON document under a named key; callers
always read/write whole collections.
"""
