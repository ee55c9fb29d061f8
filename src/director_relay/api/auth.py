"""
Cloud auth API endpoints.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..cloud import CloudAuthGateway, get_cloud_gateway

router = APIRouter(prefix="/auth")


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class ControllersRequest(BaseModel):
    accountToken: str = ""


class DirectorTokenRequest(BaseModel):
    accountToken: str = ""
    controllerCommonName: str = ""


@router.post("/login")
async def login(body: LoginRequest, gateway: CloudAuthGateway = Depends(get_cloud_gateway)):
    """Exchange account credentials for an account bearer token."""
    token = await gateway.login(body.username, body.password)
    return {"accountToken": token}


@router.post("/controllers")
async def controllers(body: ControllersRequest, gateway: CloudAuthGateway = Depends(get_cloud_gateway)):
    """List the controllers on the account."""
    return await gateway.list_controllers(body.accountToken)


@router.post("/director-token")
async def director_token(body: DirectorTokenRequest, gateway: CloudAuthGateway = Depends(get_cloud_gateway)):
    """Mint a director bearer token for one controller."""
    token = await gateway.mint_director_token(body.accountToken, body.controllerCommonName)
    return token.to_dict()
