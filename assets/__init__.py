"""assets/ -- Ownership-scoped asset resource.

Layer rule: assets/ imports only stdlib, third-party libraries and core/.
"""
