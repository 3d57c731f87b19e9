"""
Adapters package for the Vendor Portal Adapter.

This package contains components for integrating with the upstream SAP system:
- Abstract connector interface
- The SAP OData client, resource catalogue and payload normalizer
"""
