from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app import crud, schemas
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.core.security import authenticate, bearer_token, create_token, refresh_token, require_token
from app.core.timestamps import is_valid_rfc3339
from app.crud.errors import PartialBlockError, StoreError
from app.db.init_db import init_db
from app.db.session import engine, get_db

logger = logging.getLogger(__name__)
settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db(engine)
    logger.info("%s started (env=%s)", settings.app_name, settings.app_env)
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------- Error mapping ----------
_STATUS_BY_KIND = {
    "not_found": 404,
    "conflict": 400,
    "referential": 400,
    "internal": 500,
}


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    content = {"detail": exc.message}
    if isinstance(exc, PartialBlockError):
        content["block_id"] = exc.block_id
    return JSONResponse(status_code=_STATUS_BY_KIND.get(exc.kind, 500), content=content)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        msg = str(err.get("msg", "invalid request"))
        messages.append(msg.removeprefix("Value error, "))
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages) or "invalid request"})


def _rows_or_404(rows: int, what: str) -> schemas.RowsAffected:
    if rows == 0:
        raise HTTPException(404, f"{what} not found")
    return schemas.RowsAffected(rows_affected=rows)


def _check_query_date(value: Optional[str], name: str) -> None:
    if value is not None and not is_valid_rfc3339(value):
        raise HTTPException(400, f"invalid datetime found in '{name}'")


# ---------- Auth ----------
@app.post("/login", response_model=schemas.Token)
def login(payload: schemas.Login):
    if not authenticate(payload.email, payload.password):
        logger.warning("Failed login for %s", payload.email)
        raise HTTPException(401, "invalid credentials")
    return schemas.Token(access_token=create_token(payload.email))


@app.post("/refresh", response_model=schemas.Token)
def refresh(token: str = Depends(bearer_token)):
    return schemas.Token(access_token=refresh_token(token))


protected = [Depends(require_token)]

# ---------- Blocks ----------
@app.post("/block", response_model=schemas.Block, dependencies=protected)
def api_add_block(payload: schemas.BlockCreate, db: Session = Depends(get_db)):
    return crud.add_block(db, payload)


@app.put("/block", response_model=schemas.RowsAffected, dependencies=protected)
def api_update_block(payload: schemas.BlockUpdate, db: Session = Depends(get_db)):
    return _rows_or_404(crud.update_block(db, payload), "block")


@app.put("/block_start/{block_id}", response_model=schemas.RowsAffected, dependencies=protected)
def api_update_block_start(block_id: int, payload: schemas.BodyStart, db: Session = Depends(get_db)):
    return _rows_or_404(crud.update_block_start(db, block_id, payload.start), "block")


@app.put("/block_end/{block_id}", response_model=schemas.RowsAffected, dependencies=protected)
def api_update_block_end(block_id: int, payload: schemas.BodyEnd, db: Session = Depends(get_db)):
    return _rows_or_404(crud.update_block_end(db, block_id, payload.end), "block")


@app.put("/block_homeoffice/{block_id}", response_model=schemas.RowsAffected, dependencies=protected)
def api_update_block_homeoffice(block_id: int, payload: schemas.BodyHomeoffice,
                                db: Session = Depends(get_db)):
    return _rows_or_404(crud.update_block_homeoffice(db, block_id, payload.homeoffice), "block")


@app.delete("/block/{block_id}", response_model=schemas.RowsAffected, dependencies=protected)
def api_delete_block(block_id: int, db: Session = Depends(get_db)):
    return _rows_or_404(crud.delete_block(db, block_id), "block")


@app.get("/block", response_model=List[schemas.Block], dependencies=protected)
def api_get_blocks(start: str | None = Query(None), end: str | None = Query(None),
                   db: Session = Depends(get_db)):
    _check_query_date(start, "start")
    _check_query_date(end, "end")
    if start and end:
        return crud.get_blocks_within_range(db, start, end)
    if start:
        return crud.get_blocks_after_start(db, start)
    if end:
        return crud.get_blocks_before_end(db, end)
    return crud.get_all_blocks(db)


@app.get("/block_current", response_model=schemas.Block, dependencies=protected)
def api_get_current_block(db: Session = Depends(get_db)):
    return crud.get_current_block(db)


@app.get("/block/{block_id}", response_model=schemas.Block, dependencies=protected)
def api_get_block(block_id: int, db: Session = Depends(get_db)):
    return crud.get_block_by_id(db, block_id)


@app.get("/block/{block_id}/pauses", response_model=List[schemas.Pause], dependencies=protected)
def api_get_block_pauses(block_id: int, db: Session = Depends(get_db)):
    return crud.get_pauses_by_block_id(db, block_id)


# ---------- Pauses ----------
@app.post("/pause", response_model=schemas.Pause, dependencies=protected)
def api_add_pause(payload: schemas.PauseCreate, db: Session = Depends(get_db)):
    return crud.add_pause(db, payload)


@app.put("/pause", response_model=schemas.RowsAffected, dependencies=protected)
def api_update_pause(payload: schemas.Pause, db: Session = Depends(get_db)):
    return _rows_or_404(crud.update_pause(db, payload), "pause")


@app.put("/pause_start/{pause_id}", response_model=schemas.RowsAffected, dependencies=protected)
def api_update_pause_start(pause_id: int, payload: schemas.BodyStart, db: Session = Depends(get_db)):
    return _rows_or_404(crud.update_pause_start(db, pause_id, payload.start), "pause")


@app.put("/pause_end/{pause_id}", response_model=schemas.RowsAffected, dependencies=protected)
def api_update_pause_end(pause_id: int, payload: schemas.BodyEnd, db: Session = Depends(get_db)):
    return _rows_or_404(crud.update_pause_end(db, pause_id, payload.end), "pause")


@app.delete("/pause/{pause_id}", response_model=schemas.RowsAffected, dependencies=protected)
def api_delete_pause(pause_id: int, db: Session = Depends(get_db)):
    return _rows_or_404(crud.delete_pause(db, pause_id), "pause")


@app.get("/pause/{pause_id}", response_model=schemas.Pause, dependencies=protected)
def api_get_pause(pause_id: int, db: Session = Depends(get_db)):
    return crud.get_pause_by_id(db, pause_id)


# ---------- Current block / pause ----------
@app.get("/current", response_model=schemas.CurrentState, dependencies=protected)
def api_get_current(db: Session = Depends(get_db)):
    return crud.get_current(db)


@app.post("/current_block_start", response_model=schemas.Block, dependencies=protected)
def api_start_block(homeoffice: bool = Query(...), db: Session = Depends(get_db)):
    return crud.start_block(db, homeoffice)


@app.post("/current_block_end", response_model=schemas.Block, dependencies=protected)
def api_end_block(db: Session = Depends(get_db)):
    return crud.end_block(db)


@app.post("/current_pause_start", response_model=schemas.Pause, dependencies=protected)
def api_start_pause(db: Session = Depends(get_db)):
    return crud.start_pause(db)


@app.post("/current_pause_end", response_model=schemas.Pause, dependencies=protected)
def api_end_pause(db: Session = Depends(get_db)):
    return crud.end_pause(db)


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
