import logging
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Dict, List

from wmapsym.errors import MapError
from wmapsym.grid import Grid, parse, serialize
from wmapsym.rotation import Rotation
from wmapsym.symmetrizer import symmetrize

logger = logging.getLogger(__name__)

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class InspectRequest(BaseModel):
    map: str


class SymmetrizeRequest(BaseModel):
    map: str
    rotation: int = 0


def to_state(g: Grid) -> dict:
    starts: Dict[str, List[int]] = {str(p): list(pos) for p, pos in sorted(g.starts().items())}
    return {"height": g.height, "width": g.width, "starts": starts}


@app.post("/inspect")
def inspect(req: InspectRequest):
    try:
        g = parse(req.map)
    except MapError as e:
        raise HTTPException(400, str(e))
    return to_state(g)


@app.post("/symmetrize")
def symmetrize_map(req: SymmetrizeRequest):
    try:
        turns = Rotation.from_degrees(req.rotation)
        out = symmetrize(parse(req.map), turns)
    except MapError as e:
        logger.info("rejected map: %s", e)
        raise HTTPException(400, str(e))
    state = to_state(out)
    state["map"] = serialize(out)
    return state
