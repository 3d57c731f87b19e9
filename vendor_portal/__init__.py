"""
Vendor Portal Adapter - REST backend for the vendor portal.

Each endpoint answers with one call to the SAP Gateway OData service,
reshaped into the flat JSON records the portal client consumes.
"""

__version__ = "0.1.0"
