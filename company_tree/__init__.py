"""Top-level package for the company travel cost tree.

Companies reference their parent by id and travels reference their
owning company by id. This package rebuilds the company hierarchy from
those flat records, rolls every travel price up to each ancestor, and
renders the valued tree.
"""
