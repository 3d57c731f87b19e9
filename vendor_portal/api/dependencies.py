from fastapi import Depends, Request

from vendor_portal.adapters.interfaces.connector import APIConnector
from vendor_portal.services.vendor_service import VendorPortalService


async def get_connector(request: Request) -> APIConnector:
    """
    Dependency providing the upstream connector created with the application.

    Returns:
        APIConnector: The shared SAP OData client
    """
    return request.app.state.connector


async def get_vendor_service(
    connector: APIConnector = Depends(get_connector)
) -> VendorPortalService:
    """
    Dependency providing the vendor portal service.

    Returns:
        VendorPortalService: Service bound to the shared connector
    """
    return VendorPortalService(connector)
