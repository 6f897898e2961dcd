"""Session gate endpoints: passphrase login, logout, status."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from cinefam.api.state import AppState, get_state

router = APIRouter()


class LoginBody(BaseModel):
    code: str


@router.get("")
def get_session(state: AppState = Depends(get_state)):
    """Return whether the editor is unlocked."""
    return {"authenticated": state.authenticated}


@router.post("/login")
async def login(body: LoginBody, state: AppState = Depends(get_state)):
    """Check the access code; on success the catalog is loaded before returning."""
    result = await state.gate.submit_passphrase(body.code)
    if not result.ok:
        raise HTTPException(status_code=401, detail=result.message)
    return {
        "ok": True,
        "films": len(state.buffer.films),
        "series": len(state.buffer.series),
        "error": state.buffer.error_message,
    }


@router.post("/logout")
async def logout(state: AppState = Depends(get_state)):
    """Sign out and lock the editor."""
    await state.gate.logout()
    return {"ok": True}
