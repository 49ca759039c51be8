# addrverify/entrypoints/api/routers/compare.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request

from ....domain.address import is_blank
from ....schemas import SessionOut
from ....service_layer.verification import VerificationSession, broadcast_outcome
from ..deps import get_oracle

router = APIRouter(tags=["compare"])


@router.get("/compare", response_model=SessionOut)
async def compare(
    request: Request,
    address1: str | None = Query(default=None),
    address2: str | None = Query(default=None),
    callback_url: str | None = Query(default=None),
) -> SessionOut:
    """
    Runs immediately when both address parameters are present; otherwise
    returns the idle session. `callback_url` receives the final outcome and
    must belong to one of CALLBACK_ALLOWED_ORIGINS.
    """
    if callback_url and not request.app.state.settings.callback_allowed(callback_url):
        raise HTTPException(status_code=400, detail="callback_url origin is not allowed.")

    session = VerificationSession()
    if address1 is None or address2 is None:
        return SessionOut(**session.to_dict())

    if is_blank(address1) or is_blank(address2):
        # no oracle lookup at all for blank input
        session.reject_blank()
    else:
        await session.run(address1, address2, get_oracle(request))

    out = session.to_dict()
    if callback_url:
        sink = request.app.state.sink_factory(callback_url)
        res = await broadcast_outcome(session, sink)
        out["broadcast"] = {"ok": res.ok, "status_code": res.status_code, "error": res.error}

    return SessionOut(**out)
