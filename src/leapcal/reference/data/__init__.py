"""Packaged reference data (leap-seconds.list snapshot)."""
