from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel
import os

app = FastAPI(title="Mock Score Records Server", version="1.0.0")
# Tokens accepted as logged-in users; override with MOCK_SCORE_TOKENS=a,b,c
VALID_TOKENS = set(os.environ.get("MOCK_SCORE_TOKENS", "token_good").split(","))
RECORDS: list[dict] = []


class ScoreRecord(BaseModel):
    Tscore: int
    Financial: int
    Health: int
    TimeHori: int


@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/api/risk-scores", status_code=201)
def create_score(record: ScoreRecord, authorization: str | None = Header(default=None)):
    token = authorization.removeprefix("Bearer ").strip() if authorization else ""
    if token not in VALID_TOKENS:
        raise HTTPException(status_code=401, detail="invalid token")
    saved = {"id": len(RECORDS) + 1, **record.model_dump()}
    RECORDS.append(saved)
    return {"message": "Score saved", "record": saved}

@app.get("/api/risk-scores")
def list_scores(): return {"records": RECORDS}
