from pydantic import BaseModel

# ---------- Inputs ----------

class SignInIn(BaseModel):
    username: str
    password: str


# ---------- Outputs ----------

class SessionOut(BaseModel):
    session_token: str
    token_type: str = "bearer"
    expires_in: int  # secondes (durée de la session)
