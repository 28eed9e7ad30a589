from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Rules Host", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/rules_stub") if os.path.exists("/rules_stub") else Path(__file__).resolve().parent / "rules_stub"

@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/assets/{filename}")
def get_rules_file(filename: str):
    file = DATA_DIR / Path(filename).name
    if file.suffix != ".json" or not file.exists():
        raise HTTPException(status_code=404, detail="rules file not found")
    return JSONResponse(content=json.loads(file.read_text(encoding="utf-8")))
