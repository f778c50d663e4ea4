"""Top-level package for the bus booking core.

Administrators define routes, passengers register, book routes, propose
changes and vote on proposals. The package enforces the integrity rules
between those entities: shared monotonic ids, referential checks, email
uniqueness, name/email format, and de-duplicated route membership.
"""
