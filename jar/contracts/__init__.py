"""
Contracts module: shapes accepted from the persistence layer.

Usage:
    from jar.contracts import load_profile, load_commitments

    profile = load_profile(profile_row)
    commitments = load_commitments(commitment_rows)
"""

from .records import (
    CommitmentRecord,
    ProfileRecord,
    load_commitment,
    load_commitments,
    load_profile,
)

__all__ = [
    "ProfileRecord",
    "CommitmentRecord",
    "load_profile",
    "load_commitment",
    "load_commitments",
]
