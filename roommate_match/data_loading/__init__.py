"""Data loading module for profile and listing exports."""

from .loaders import load_profiles, load_listings, load_profile_record

__all__ = ["load_profiles", "load_listings", "load_profile_record"]
