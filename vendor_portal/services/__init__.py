"""
Services package for the Vendor Portal Adapter.

Services orchestrate one upstream call per request and map its result to
domain records. They depend on the connector interface, not on httpx.
"""
