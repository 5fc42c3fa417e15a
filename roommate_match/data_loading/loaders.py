"""
Data loading functions for batch scoring.

This module loads profile and listing exports (CSV or JSON) from the
storage layer. No scoring is done here; rows become LifestyleProfile
records or plain listing dictionaries.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Any

import pandas as pd

from ..schema import LifestyleProfile

logger = logging.getLogger(__name__)

PROFILE_ID_COLUMNS = ("userId", "user_id", "id")


def _read_table(filepath: str) -> pd.DataFrame:
    """Read a CSV or JSON table, chosen by file suffix."""
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {filepath}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        with open(path, "r") as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise ValueError(f"JSON data file must contain a list of records: {filepath}")
        # object dtype keeps integer ids as ints when a row lacks the key
        df = pd.DataFrame(records, dtype=object)
    elif suffix in (".csv", ".tsv"):
        df = pd.read_csv(path, sep="\t" if suffix == ".tsv" else ",", dtype=str)
    else:
        raise ValueError(f"Unsupported data file type {suffix!r}: {filepath}")

    if df.empty:
        raise ValueError(f"Data file is empty: {filepath}")

    logger.info(f"Loaded {len(df)} rows with {len(df.columns)} columns from {filepath}")
    return df


def _rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """DataFrame rows as dicts with NaN cells turned into None."""
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def load_profiles(filepath: str, strict: bool = False) -> Dict[str, LifestyleProfile]:
    """
    Load lifestyle profiles from a CSV or JSON export.

    The export should contain:
    - An id column (userId, user_id or id)
    - Any subset of the eight lifestyle attribute columns (camelCase)
    - Each row represents one user's profile

    Args:
        filepath: Path to the profiles file
        strict: Reject attribute values outside the enumerations

    Returns:
        Dictionary of profile id -> LifestyleProfile, in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty, has no id column, or (strict)
            contains an unrecognized attribute value
    """
    df = _read_table(filepath)

    id_column = next((c for c in PROFILE_ID_COLUMNS if c in df.columns), None)
    if id_column is None:
        raise ValueError(
            f"Profiles file has no id column (expected one of {list(PROFILE_ID_COLUMNS)}): {filepath}"
        )

    profiles: Dict[str, LifestyleProfile] = {}
    for row in _rows(df):
        if row.get(id_column) is None:
            logger.warning(f"Skipping profile row without {id_column}")
            continue
        profile = LifestyleProfile.from_dict(row, strict=strict)
        if profile.profile_id in profiles:
            logger.warning(f"Duplicate profile id {profile.profile_id}; keeping the last row")
        profiles[profile.profile_id] = profile

    n_empty = sum(1 for p in profiles.values() if p.is_empty())
    logger.info(f"Loaded {len(profiles)} profiles ({n_empty} with no lifestyle attributes)")
    return profiles


def load_listings(filepath: str, owner_key: str = "ownerId") -> List[Dict[str, Any]]:
    """
    Load room listings from a CSV or JSON export.

    Args:
        filepath: Path to the listings file
        owner_key: Column holding the listing owner's user id

    Returns:
        List of listing dictionaries in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or has no owner column
    """
    df = _read_table(filepath)
    if owner_key not in df.columns:
        raise ValueError(f"Listings file has no {owner_key!r} column: {filepath}")

    listings = _rows(df)
    logger.info(f"Loaded {len(listings)} listings")
    return listings


def load_profile_record(filepath: str, strict: bool = False) -> LifestyleProfile:
    """
    Load a single profile from a JSON object file.

    Args:
        filepath: Path to the JSON file
        strict: Reject attribute values outside the enumerations

    Returns:
        LifestyleProfile instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file does not hold a JSON object
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profile file not found: {filepath}")

    with open(path, "r") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Profile file must contain a JSON object: {filepath}")

    return LifestyleProfile.from_dict(data, strict=strict)
