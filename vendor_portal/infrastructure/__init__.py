"""Infrastructure layer for the Vendor Portal Adapter."""
