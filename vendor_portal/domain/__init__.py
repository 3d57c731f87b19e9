"""
Domain package for the Vendor Portal Adapter.

Holds the records returned to the portal client. They are built from SAP
entities but carry none of the SAP naming.
"""
