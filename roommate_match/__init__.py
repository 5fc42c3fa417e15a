"""
Roommate Compatibility Scoring

This package implements the lifestyle compatibility engine of a roommate
matching marketplace: two lifestyle profiles in, a 0-100 match score with
per-attribute factors, strengths and concerns out.

Key Design Decisions:
- One rule per lifestyle attribute, each a small pure function
- Fixed, hand-authored weights combined by weighted average
- Unset attributes handled by an explicit policy (neutral or exclude)
- No I/O in scoring; loaders, reports and the CLI live around it
"""

__version__ = "1.0.0"
