"""Source root for the infrastructure layer.

Adapters here handle file I/O and binary formats; domain logic stays in
`domain`.
"""
