import logging

from fastapi import FastAPI, HTTPException, Request
import uvicorn

from stackscan.config import load_config
from stackscan.lookup import MethodLookup, adaptive_lookup
from stackscan.runtime import infer_runtime
from stackscan.stackparse import parse_line, parse_stack

CONFIG = load_config()
logging.basicConfig(level=CONFIG.log_level)

app = FastAPI()


async def _payload(request: Request) -> dict:
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="body must be JSON")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="body must be a JSON object")
    return payload


def _require_text(payload: dict, field: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"'{field}' must be a string")
    return value


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/parse")
async def parse(request: Request):
    payload = await _payload(request)
    frame = parse_line(_require_text(payload, "line"))
    return frame.to_dict() if frame else None


@app.post("/parse-stack")
async def parse_stack_text(request: Request):
    payload = await _payload(request)
    frames = parse_stack(_require_text(payload, "stack"))
    return {"frames": [frame.to_dict() for frame in frames[: CONFIG.max_frames]]}


@app.post("/lookup")
async def lookup(request: Request):
    payload = await _payload(request)
    stack = _require_text(payload, "stack")
    method = _require_text(payload, "method")
    offset = payload.get("offset", 0)
    if not isinstance(offset, int) or isinstance(offset, bool):
        raise HTTPException(status_code=400, detail="'offset' must be an integer")

    pinned = payload.get("runtime")
    if pinned is not None and not isinstance(pinned, str):
        raise HTTPException(status_code=400, detail="'runtime' must be a string")

    current = CONFIG.runtime or infer_runtime(parse_stack(stack))
    found = adaptive_lookup([MethodLookup(stack, method, offset, runtime=pinned)], runtime=current)
    if not found:
        return {"index": None, "frame": None}
    index, frame = found
    return {"index": index, "frame": frame.to_dict()}

if __name__ == "__main__":
    uvicorn.run(app, host=CONFIG.host, port=CONFIG.port)
