"""CICO time-clock backend.

This package is organized by feature modules (profiles, time_entries, reports, ...)
with a thin Flask controller layer over service/repository layers. Persistence,
auth and storage are delegated to Supabase.
"""
