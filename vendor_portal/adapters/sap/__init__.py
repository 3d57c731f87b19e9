"""SAP Gateway OData integration."""
