"""
Static demo data for the CRM panel.

Fixture records used by DemoCrmService for development, testing, and
demonstrations without a running backend.

Modules:
- demo_records: Representative and invoice payloads in the backend's shape
"""
