'''Pure Python backend: alphabet, node arena, Ukkonen builder, suffix indexer and queries.'''
