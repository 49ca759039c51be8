# addrverify/entrypoints/api/routers/verify.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from ....adapters.clients.base import AddressOracle
from ....domain.address import is_blank
from ....domain.types import Precomputation
from ....exceptions import OracleError
from ....schemas import VerdictOut, VerifyRequest
from ..deps import get_oracle

log = logging.getLogger(__name__)

router = APIRouter(tags=["verify"])


@router.post("/api/verify", response_model=VerdictOut)
async def verify(
    body: VerifyRequest,
    oracle: AddressOracle = Depends(get_oracle),
) -> VerdictOut:
    if is_blank(body.address1) or is_blank(body.address2) or body.precomputation is None:
        raise HTTPException(status_code=400, detail="Missing address data in the request body.")

    pre = Precomputation(
        normalized_address1=body.precomputation.normalizedAddress1,
        normalized_address2=body.precomputation.normalizedAddress2,
        distance=body.precomputation.levenshteinDistance,
    )

    try:
        result = await oracle.verify(body.address1, body.address2, pre)
    except OracleError as e:
        log.error("verify failed: %s (cause: %r)", e, e.__cause__)
        raise HTTPException(status_code=500, detail="Failed to verify addresses via the backend service.")

    return VerdictOut(**result.to_dict())


@router.api_route("/api/verify", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def verify_wrong_method() -> None:
    raise HTTPException(status_code=405, detail="Only POST requests are allowed", headers={"Allow": "POST"})
